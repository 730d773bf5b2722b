# Runs Vivaldi over a PlanetLab latency matrix from
# https://github.com/uofa-rzhu3/NetLatency-Data
#
# Each data file holds one line per node with one RTT in ms per peer.
#
#   python examples/planetlab.py NetLatency-Data/PlanetLab/PlanetLabData_1

import random
import sys

import msgspec

from vivaldi_nc import NetworkCoordinate3D
from vivaldi_nc.encoding import to_message


MAX_UPDATES = 30_000
TARGET_ERROR = 5.0


def load_planetlab_file(filename: str) -> list[list[float]]:
    with open(filename) as data_file:
        data = [
            [float(token) for token in line.split()]
            for line in data_file
            if line.strip()
        ]

    if any(len(row) != len(data) for row in data):
        raise ValueError(f"{filename}: latency matrix must be square")

    return data


def run(filename: str):
    data = load_planetlab_file(filename)
    num_nodes = len(data)

    rng = random.Random()
    coordinates = [NetworkCoordinate3D(rng=rng) for _ in range(num_nodes)]

    error = float("inf")
    for _ in range(MAX_UPDATES):
        local = rng.randrange(num_nodes)
        remote = rng.randrange(num_nodes)
        if local == remote:
            continue

        coordinates[local].update_ms(coordinates[remote].snapshot(), data[local][remote])

        error = sum(coordinate.error for coordinate in coordinates) / num_nodes
        if error < TARGET_ERROR:
            break

    print(
        msgspec.json.format(
            msgspec.json.encode([to_message(coordinate) for coordinate in coordinates]),
            indent=2,
        ).decode()
    )
    print(f"average error: {error:.4f}", file=sys.stderr)


if __name__ == "__main__":
    run(sys.argv[1])
