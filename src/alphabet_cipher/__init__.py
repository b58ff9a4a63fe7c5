from .cipher import (
    ALPHABET,
    LOWER,
    LOWER_RANGE,
    RANGE,
    UPPER,
    UPPER_RANGE,
    CipherError,
    InvalidKeyError,
    OutOfBoundsError,
    bellaso_decode,
    bellaso_encode,
    caesar_decode,
    caesar_encode,
    extend_key,
    first_out_of_bounds,
    is_in_bounds,
    wrap_code,
)
from .config import (
    CONFIG_PATH,
    DEFAULT_POLICY,
    VALIDATION_POLICIES,
    CipherConfig,
    ValidationPolicy,
    load_config,
    resolve_policy,
    save_config,
)
from .history import log_event, read_history

__all__ = [
    "ALPHABET",
    "LOWER",
    "LOWER_RANGE",
    "RANGE",
    "UPPER",
    "UPPER_RANGE",
    "CipherError",
    "InvalidKeyError",
    "OutOfBoundsError",
    "bellaso_decode",
    "bellaso_encode",
    "caesar_decode",
    "caesar_encode",
    "extend_key",
    "first_out_of_bounds",
    "is_in_bounds",
    "wrap_code",
    "CONFIG_PATH",
    "DEFAULT_POLICY",
    "VALIDATION_POLICIES",
    "CipherConfig",
    "ValidationPolicy",
    "load_config",
    "resolve_policy",
    "save_config",
    "log_event",
    "read_history",
]
