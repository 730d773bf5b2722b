from .coordinate_codec import (
    decode_json,
    decode_msgpack,
    encode_json,
    encode_msgpack,
    from_message,
    to_message,
)

__all__ = [
    "decode_json",
    "decode_msgpack",
    "encode_json",
    "encode_msgpack",
    "from_message",
    "to_message",
]
