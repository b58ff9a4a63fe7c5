import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Literal, Optional

CONFIG_PATH = Path.home() / ".alphabet_cipher.json"

ValidationPolicy = Literal["all", "legacy", "none"]
# "all": every transform checks its text (and Bellaso its key phrase).
# "legacy": only Caesar encoding checks, as the first release did.
# "none": nothing is checked; outputs are still reduced into the alphabet.
VALIDATION_POLICIES = ["all", "legacy", "none"]
DEFAULT_POLICY: ValidationPolicy = "all"

ENV_MAPPING: Dict[str, str] = {
    "validation": "ALPHABET_CIPHER_VALIDATION",
    "history": "ALPHABET_CIPHER_HISTORY",
    "default_shift": "ALPHABET_CIPHER_SHIFT",
}

_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_VALUES
    return bool(value)


def check_policy(policy: str) -> str:
    """Return `policy` unchanged if it names a known validation policy."""
    if policy not in VALIDATION_POLICIES:
        raise ValueError(
            f"Unsupported validation policy: {policy!r} (choose from {', '.join(VALIDATION_POLICIES)})"
        )
    return policy


@dataclass
class CipherConfig:
    validation: str = DEFAULT_POLICY
    history: bool = True
    default_shift: int = 3

    def to_dict(self) -> Dict[str, object]:
        return {
            "validation": self.validation,
            "history": self.history,
            "default_shift": self.default_shift,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "CipherConfig":
        return cls(
            validation=str(data.get("validation", DEFAULT_POLICY) or DEFAULT_POLICY),
            history=_parse_flag(data.get("history", True)),
            default_shift=int(data.get("default_shift", 3) or 0),
        )


def _merge_env(cfg: CipherConfig) -> CipherConfig:
    validation = os.getenv(ENV_MAPPING["validation"], "").strip().lower()
    if validation:
        cfg.validation = validation
    history = os.getenv(ENV_MAPPING["history"], "").strip().lower()
    if history:
        cfg.history = _parse_flag(history)
    shift = os.getenv(ENV_MAPPING["default_shift"], "").strip()
    if shift:
        try:
            cfg.default_shift = int(shift)
        except ValueError:
            pass
    return cfg


def load_config(path: Path = CONFIG_PATH, merge_env: bool = True) -> CipherConfig:
    config = CipherConfig()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            config = CipherConfig.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError):
            # Fall back to defaults/env if file malformed.
            config = CipherConfig()
    if merge_env:
        config = _merge_env(config)
    if config.validation not in VALIDATION_POLICIES:
        config.validation = DEFAULT_POLICY
    return config


def save_config(config: CipherConfig, path: Path = CONFIG_PATH) -> None:
    payload = config.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def resolve_policy(
    policy: Optional[str] = None, config: Optional[CipherConfig] = None
) -> ValidationPolicy:
    """Pick the explicit policy if given, else the configured one."""
    if policy is None:
        cfg = config or load_config()
        policy = cfg.validation
    return check_policy(policy)  # type: ignore[return-value]
