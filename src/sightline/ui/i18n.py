"""Internationalisation strings for the Sightline UI.

Usage::

    from sightline.ui.i18n import t, set_language

    set_language("Turkish")
    print(t().btn_undo)          # "Geri Al"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str
    status_ready: str
    status_engine_unavailable: str  # e.g. "Engine unavailable: {path}"
    status_illegal_move: str
    status_game_over: str

    # ── Controls ─────────────────────────────────────────────────────────
    btn_flip: str
    btn_reset: str
    btn_undo: str

    # ── Analysis panel ───────────────────────────────────────────────────
    analysis_title: str
    analysis_eval: str
    analysis_depth: str
    analysis_best_move: str
    analysis_calculating: str
    analysis_no_move: str
    analysis_pv: str
    analysis_pv_waiting: str


_EN = Strings(
    window_title="Sightline",
    status_ready="Ready",
    status_engine_unavailable="Engine unavailable: {path}",
    status_illegal_move="Illegal move",
    status_game_over="Game over",
    btn_flip="Flip",
    btn_reset="Reset",
    btn_undo="Undo",
    analysis_title="Analysis",
    analysis_eval="Evaluation",
    analysis_depth="Depth",
    analysis_best_move="Best move",
    analysis_calculating="Calculating…",
    analysis_no_move="No legal moves",
    analysis_pv="Principal variation",
    analysis_pv_waiting="The engine is analysing the position…",
)

_TR = Strings(
    window_title="Sightline",
    status_ready="Hazır",
    status_engine_unavailable="Satranç motoru yüklenemedi: {path}",
    status_illegal_move="Geçersiz hamle",
    status_game_over="Oyun bitti",
    btn_flip="Çevir",
    btn_reset="Sıfırla",
    btn_undo="Geri Al",
    analysis_title="Analiz Paneli",
    analysis_eval="Durum (Evaluasyon)",
    analysis_depth="Derinlik",
    analysis_best_move="En İyi Hamle",
    analysis_calculating="Hesaplanıyor…",
    analysis_no_move="Yasal hamle yok",
    analysis_pv="Motorun Düşünce Hattı",
    analysis_pv_waiting="Satranç motoru hamleleri analiz ediyor…",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Turkish": _TR,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active string table."""
    return _current


def set_language(language: str) -> None:
    """Switch the active locale; unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
