from .codec import (
    DecodeError,  # noqa: F401
    decode,  # noqa: F401
    decode_frame,  # noqa: F401
    decode_quaternion,  # noqa: F401
    decode_vector,  # noqa: F401
    dumps,  # noqa: F401
    encode,  # noqa: F401
    encode_frame,  # noqa: F401
    encode_quaternion,  # noqa: F401
    encode_vector,  # noqa: F401
    loads,  # noqa: F401
)
from .files import load_frames, save_frames  # noqa: F401
