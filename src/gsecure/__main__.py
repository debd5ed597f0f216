# G-Secure: Command-Line Entry Point
#
# Thin wrapper over the core for scripting and manual checks:
#   gsecure score <password|->
#   gsecure generate [--length N] [--keyword K] [--assess] ...
#   gsecure breach <password|->
#   gsecure encrypt --keyword <K|-> <text|->
#   gsecure decrypt --keyword <K|-> <token|->
#
# "-" reads the value from stdin (one line per "-") so secrets stay out
# of shell history. Results are printed as JSON.

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from . import __version__
from .config import load_settings
from .core import configure_logging
from .exceptions import ConfigurationError, InvalidCipherInput, InvalidKeyOrCorruptData
from .passwords import (
    BreachChecker,
    GenerationOptions,
    generate_and_assess,
    generate_password,
    score_password,
)
from .vault import decrypt_with_keyword, encrypt_with_keyword

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _read_value(value: str, stdin: TextIO) -> str:
    if value != "-":
        return value
    return stdin.readline().rstrip("\r\n")


def _emit(payload: Dict[str, Any], stdout: TextIO) -> None:
    stdout.write(json.dumps(payload, indent=2) + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsecure",
        description="G-Secure - password strength, generation, breach lookup and keyword cipher",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"G-Secure v{__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("score", help="Evaluate password strength")
    p_score.add_argument("password", help="Password to score, or - for stdin")

    p_gen = sub.add_parser("generate", help="Generate a password")
    p_gen.add_argument("--length", type=int, default=16, help="Password length (15-128, default: 16)")
    p_gen.add_argument("--keyword", default="", help="Keyword to embed verbatim")
    p_gen.add_argument("--no-lowercase", action="store_true", help="Exclude lowercase letters")
    p_gen.add_argument("--no-uppercase", action="store_true", help="Exclude uppercase letters")
    p_gen.add_argument("--no-numbers", action="store_true", help="Exclude digits")
    p_gen.add_argument("--no-special", action="store_true", help="Exclude special characters")
    p_gen.add_argument("--exclude-similar", action="store_true", help="Drop look-alikes (i l 1 I o O 0)")
    p_gen.add_argument("--exclude-ambiguous", action="store_true", help="Drop brackets, quotes and punctuation")
    p_gen.add_argument("--assess", action="store_true", help="Also score the generated password")

    p_breach = sub.add_parser("breach", help="Look up a password in the breach corpus")
    p_breach.add_argument("password", help="Password to check, or - for stdin")

    p_enc = sub.add_parser("encrypt", help="Encrypt text with a keyword")
    p_enc.add_argument("--keyword", required=True, help="Keyword, or - for stdin")
    p_enc.add_argument("text", help="Plaintext, or - for stdin")

    p_dec = sub.add_parser("decrypt", help="Decrypt a token with a keyword")
    p_dec.add_argument("--keyword", required=True, help="Keyword, or - for stdin")
    p_dec.add_argument("token", help="Envelope token, or - for stdin")

    return parser


def _cmd_score(args, stdin, stdout, settings) -> int:
    result = score_password(_read_value(args.password, stdin))
    _emit(result.to_dict(), stdout)
    return EXIT_OK


def _cmd_generate(args, stdin, stdout, settings) -> int:
    options = GenerationOptions(
        length=args.length,
        keyword=args.keyword,
        include_lowercase=not args.no_lowercase,
        include_uppercase=not args.no_uppercase,
        include_numbers=not args.no_numbers,
        include_special=not args.no_special,
        exclude_similar=args.exclude_similar,
        exclude_ambiguous=args.exclude_ambiguous,
    )
    if args.assess:
        result, strength = generate_and_assess(options)
        payload = {"gresponse": result.to_dict()}
        if strength is not None:
            payload["strength"] = strength.to_dict()
    else:
        result = generate_password(options)
        payload = result.to_dict()
    _emit(payload, stdout)
    return EXIT_OK if result.success else EXIT_FAILED


def _cmd_breach(args, stdin, stdout, settings) -> int:
    outcome = BreachChecker.from_settings(settings).check(_read_value(args.password, stdin))
    _emit(outcome.to_dict(), stdout)
    return EXIT_OK if outcome.available else EXIT_FAILED


def _cmd_encrypt(args, stdin, stdout, settings) -> int:
    keyword = _read_value(args.keyword, stdin)
    text = _read_value(args.text, stdin)
    try:
        token = encrypt_with_keyword(text, keyword)
    except InvalidCipherInput as exc:
        _emit({"error": str(exc)}, stdout)
        return EXIT_FAILED
    _emit({"token": token}, stdout)
    return EXIT_OK


def _cmd_decrypt(args, stdin, stdout, settings) -> int:
    keyword = _read_value(args.keyword, stdin)
    token = _read_value(args.token, stdin)
    try:
        plaintext = decrypt_with_keyword(token, keyword)
    except InvalidKeyOrCorruptData as exc:
        _emit({"error": str(exc)}, stdout)
        return EXIT_FAILED
    _emit({"plaintext": plaintext}, stdout)
    return EXIT_OK


_COMMANDS = {
    "score": _cmd_score,
    "generate": _cmd_generate,
    "breach": _cmd_breach,
    "encrypt": _cmd_encrypt,
    "decrypt": _cmd_decrypt,
}


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Run the CLI and return the process exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        sys.stderr.write(f"Configuration error: {exc}\n")
        return EXIT_CONFIG

    configure_logging(settings.log_level, settings.log_json)
    return _COMMANDS[args.command](args, stdin, stdout, settings)


if __name__ == "__main__":
    sys.exit(main())
