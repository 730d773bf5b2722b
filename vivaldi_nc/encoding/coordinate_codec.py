import random

import msgspec

from vivaldi_nc.core.network_coordinate import NetworkCoordinate
from vivaldi_nc.exceptions import CoordinateDecodeError
from vivaldi_nc.models.coordinates import CoordinateMessage, VivaldiConfig


_json_encoder = msgspec.json.Encoder()
_json_decoder = msgspec.json.Decoder(CoordinateMessage)
_msgpack_encoder = msgspec.msgpack.Encoder()
_msgpack_decoder = msgspec.msgpack.Decoder(CoordinateMessage)


def to_message(coordinate: NetworkCoordinate) -> CoordinateMessage:
    return CoordinateMessage(
        position=list(coordinate.position.position),
        height=coordinate.position.height,
        error=coordinate.error,
    )


def from_message(
    message: CoordinateMessage,
    dimensions: int | None = None,
    config: VivaldiConfig | None = None,
    rng: random.Random | None = None,
) -> NetworkCoordinate:
    """
    Build a coordinate from a decoded message.

    Values are re-validated by ``NetworkCoordinate.from_parts``; an
    invalid position is replaced rather than rejected. Structural
    problems (no components, wrong dimensionality) raise
    ``CoordinateDecodeError``.
    """
    if len(message.position) < 1:
        raise CoordinateDecodeError("Coordinate position has no components")

    if dimensions is not None and len(message.position) != dimensions:
        raise CoordinateDecodeError(
            f"Expected {dimensions}-dimensional coordinate, got {len(message.position)}"
        )

    return NetworkCoordinate.from_parts(
        message.position,
        message.height,
        message.error,
        config=config,
        rng=rng,
    )


def encode_json(coordinate: NetworkCoordinate) -> bytes:
    return _json_encoder.encode(to_message(coordinate))


def decode_json(
    data: bytes | str,
    dimensions: int | None = None,
    config: VivaldiConfig | None = None,
    rng: random.Random | None = None,
) -> NetworkCoordinate:
    try:
        message = _json_decoder.decode(data)

    except msgspec.DecodeError as err:
        raise CoordinateDecodeError(str(err)) from err

    return from_message(
        message,
        dimensions=dimensions,
        config=config,
        rng=rng,
    )


def encode_msgpack(coordinate: NetworkCoordinate) -> bytes:
    return _msgpack_encoder.encode(to_message(coordinate))


def decode_msgpack(
    data: bytes,
    dimensions: int | None = None,
    config: VivaldiConfig | None = None,
    rng: random.Random | None = None,
) -> NetworkCoordinate:
    try:
        message = _msgpack_decoder.decode(data)

    except msgspec.DecodeError as err:
        raise CoordinateDecodeError(str(err)) from err

    return from_message(
        message,
        dimensions=dimensions,
        config=config,
        rng=rng,
    )
