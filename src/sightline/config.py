"""Application settings and their command-line form."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from dataclasses import dataclass, field

from sightline.engine.options import EngineOptions
from sightline.ui.i18n import LANGUAGES

ENGINE_ENV_VAR = "SIGHTLINE_ENGINE"
DEFAULT_ENGINE = "stockfish"
BOARD_THEMES = ("Classic", "Blue", "Green", "Walnut", "Slate")


def _default_engine_path() -> str:
    return os.environ.get(ENGINE_ENV_VAR) or DEFAULT_ENGINE


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # General
    language: str = "English"
    verbose: bool = False

    # Board
    board_theme: str = "Green"
    show_legal_moves: bool = True

    # Engine
    engine_path: str = field(default_factory=_default_engine_path)
    analysis_depth: int = 25
    engine: EngineOptions = field(default_factory=EngineOptions)


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    defaults = EngineOptions()
    parser = argparse.ArgumentParser(
        prog="sightline",
        description="Chess board with live UCI engine analysis.",
    )
    parser.add_argument(
        "--engine",
        default=None,
        help=f"Path to a UCI engine binary (default: ${ENGINE_ENV_VAR} or "
        f"'{DEFAULT_ENGINE}')",
    )
    parser.add_argument(
        "--depth", type=_positive_int, default=25, help="Target search depth"
    )
    parser.add_argument(
        "--hash", type=_positive_int, default=defaults.hash_size_mb, help="Hash (MB)"
    )
    parser.add_argument(
        "--threads", type=_positive_int, default=defaults.thread_count
    )
    parser.add_argument(
        "--skill",
        type=int,
        choices=range(0, 21),
        default=defaults.skill_level,
        metavar="0-20",
    )
    parser.add_argument("--language", choices=LANGUAGES, default="English")
    parser.add_argument("--theme", choices=BOARD_THEMES, default="Green")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_settings(argv: Sequence[str] | None = None) -> AppSettings:
    """Build :class:`AppSettings` from command-line arguments."""
    args = build_parser().parse_args(argv)
    settings = AppSettings(
        language=args.language,
        verbose=args.verbose,
        board_theme=args.theme,
        analysis_depth=args.depth,
        engine=EngineOptions(
            hash_size_mb=args.hash,
            thread_count=args.threads,
            skill_level=args.skill,
        ),
    )
    if args.engine:
        settings.engine_path = args.engine
    return settings
