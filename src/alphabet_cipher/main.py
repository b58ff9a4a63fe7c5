import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import (
    ALPHABET,
    LOWER_RANGE,
    UPPER_RANGE,
    VALIDATION_POLICIES,
    CipherError,
    bellaso_decode,
    bellaso_encode,
    caesar_decode,
    caesar_encode,
    first_out_of_bounds,
)
from .config import CONFIG_PATH, load_config, resolve_policy, save_config
from .history import HISTORY_PATH, log_event, read_history


PREFERRED_ENCODINGS: List[str] = ["utf-8", "cp1252", "latin-1"]


def decode_bytes_best_effort(data: bytes) -> str:
    """
    Decode bytes with the first encoding that accepts them.

    latin-1 maps every byte, so undecodable input still reaches the bounds
    check and is reported there.
    """
    for enc in PREFERRED_ENCODINGS:
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1", errors="replace")


def _load_text(args: argparse.Namespace) -> str:
    if args.in_file:
        content = decode_bytes_best_effort(Path(args.in_file).read_bytes())
        if content.endswith("\n"):
            content = content[:-1]
            if content.endswith("\r"):
                content = content[:-1]
        return content
    if args.text is None:
        raise argparse.ArgumentTypeError("Provide TEXT or --in-file.")
    return args.text


def _maybe_write_output(args: argparse.Namespace, output: str) -> Optional[str]:
    if getattr(args, "out_file", None):
        Path(args.out_file).write_text(output, encoding="utf-8")
        return None
    return output


def _record(args: argparse.Namespace, payload: dict) -> None:
    if args.no_history or not args.settings.history:
        return
    log_event(action=args.command, payload=payload, path=Path(args.history_file))


def _run_caesar(args: argparse.Namespace) -> Optional[str]:
    text = _load_text(args)
    shift = args.shift if args.shift is not None else args.settings.default_shift
    policy = resolve_policy(args.policy, args.settings)
    if args.mode == "encrypt":
        output = caesar_encode(text, shift, policy=policy)
    else:
        output = caesar_decode(text, shift, policy=policy)
    _record(args, {"mode": args.mode, "length": len(text), "policy": policy})
    return _maybe_write_output(args, output)


def _run_bellaso(args: argparse.Namespace) -> Optional[str]:
    text = _load_text(args)
    policy = resolve_policy(args.policy, args.settings)
    if args.mode == "encrypt":
        output = bellaso_encode(text, args.key, policy=policy)
    else:
        output = bellaso_decode(text, args.key, policy=policy)
    _record(args, {"mode": args.mode, "length": len(text), "policy": policy})
    return _maybe_write_output(args, output)


def _run_check(args: argparse.Namespace) -> str:
    position = first_out_of_bounds(args.text)
    if position is None:
        return "in bounds"
    ch = args.text[position]
    return (
        f"out of bounds: {ch!r} (code {ord(ch)}) at position {position}; "
        f"allowed {LOWER_RANGE!r}..{UPPER_RANGE!r}"
    )


def _run_config(args: argparse.Namespace) -> str:
    path = Path(args.config)
    # Environment overrides are applied for display only, never saved.
    config = load_config(path, merge_env=False)
    changed = False
    if args.validation is not None:
        config.validation = args.validation
        changed = True
    if args.history is not None:
        config.history = args.history == "on"
        changed = True
    if args.default_shift is not None:
        config.default_shift = args.default_shift
        changed = True
    if changed:
        save_config(config, path)
    config = load_config(path)

    lines = [
        f"validation: {config.validation}",
        f"history: {'on' if config.history else 'off'}",
        f"default_shift: {config.default_shift}",
    ]
    if changed:
        lines.append(f"Saved to {path}; environment variables still take precedence.")
    return "\n".join(lines)


def _run_history(args: argparse.Namespace) -> str:
    records = read_history(Path(args.history_file), limit=args.limit)
    if not records:
        return "No history recorded."
    lines = []
    for rec in records:
        extras = ", ".join(f"{k}={v}" for k, v in rec.items() if k not in ("action", "time"))
        lines.append(f"{rec.get('time', '?')} {rec.get('action', 'unknown')} {extras}".rstrip())
    return "\n".join(lines)


def _add_io_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("mode", choices=["encrypt", "decrypt"])
    p.add_argument("text", nargs="?", help="Input text (ignored if --in-file).")
    p.add_argument("--in-file", help="Read input from file (UTF-8, falling back to cp1252/latin-1).")
    p.add_argument("--out-file", help="Write the result to file instead of stdout.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Caesar and Bellaso ciphers over the {LOWER_RANGE!r}..{UPPER_RANGE!r} alphabet."
    )
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record the operation in history."
    )
    parser.add_argument(
        "--policy",
        choices=VALIDATION_POLICIES,
        help="Bounds validation policy (default: from config, normally 'all').",
    )
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Configuration file path.")
    parser.add_argument("--history-file", default=str(HISTORY_PATH), help="History file path.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    caesar_parser = subparsers.add_parser("caesar", help="Caesar cipher encrypt/decrypt")
    _add_io_arguments(caesar_parser)
    caesar_parser.add_argument(
        "--shift",
        type=int,
        help="Offset to apply; any sign or magnitude. Defaults to the configured shift.",
    )
    caesar_parser.set_defaults(func=_run_caesar)

    bellaso_parser = subparsers.add_parser("bellaso", help="Bellaso cipher encrypt/decrypt")
    _add_io_arguments(bellaso_parser)
    bellaso_parser.add_argument("--key", required=True, help="Key phrase.")
    bellaso_parser.set_defaults(func=_run_bellaso)

    check_parser = subparsers.add_parser("check", help="Check text against the alphabet")
    check_parser.add_argument("text", help="Text to check.")
    check_parser.set_defaults(func=_run_check)

    alphabet_parser = subparsers.add_parser("alphabet", help="Print the cipher alphabet")
    alphabet_parser.set_defaults(func=lambda args: ALPHABET)

    config_parser = subparsers.add_parser("config", help="Show or update configuration")
    config_parser.add_argument("--validation", choices=VALIDATION_POLICIES)
    config_parser.add_argument("--history", choices=["on", "off"])
    config_parser.add_argument("--shift", dest="default_shift", type=int)
    config_parser.set_defaults(func=_run_config)

    history_parser = subparsers.add_parser("history", help="Show recorded operations")
    history_parser.add_argument("--limit", type=int, default=20)
    history_parser.set_defaults(func=_run_history)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.settings = load_config(Path(args.config))
    try:
        result = args.func(args)
    except (CipherError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except argparse.ArgumentTypeError as exc:
        parser.print_usage(sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if result is not None:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
