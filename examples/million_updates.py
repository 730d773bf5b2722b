import datetime
import time

from vivaldi_nc import NetworkCoordinate, NetworkCoordinate2D, NetworkCoordinate3D


NUM_NODES = 1_000


def million_updates(coordinate_type: type[NetworkCoordinate]):
    coordinates = [coordinate_type() for _ in range(NUM_NODES)]

    for i in range(NUM_NODES):
        coordinate_i = coordinates[i].snapshot()

        for j, coordinate_j in enumerate(coordinates):
            if i == j:
                continue

            coordinate_j.update(coordinate_i, datetime.timedelta(milliseconds=abs(i - j)))


def run():
    for name, coordinate_type in (
        ("2D", NetworkCoordinate2D),
        ("3D", NetworkCoordinate3D),
    ):
        start = time.perf_counter()
        million_updates(coordinate_type)
        elapsed = time.perf_counter() - start

        print(f"million {name} updates: {elapsed:.2f}s")


run()
