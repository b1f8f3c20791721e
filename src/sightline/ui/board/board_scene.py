"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

import math
from typing import Any

import chess
from PyQt6.QtCore import QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsPolygonItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from sightline.engine.models import UciMove
from sightline.game.state import GameState
from sightline.ui.highlights import HighlightStyle, compute_highlights
from sightline.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, drag highlights and best-move arrow.

    Signals:
        move_attempted(UciMove): A piece was dropped on another square. The
            receiver decides legality; the scene re-syncs from the game
            afterwards either way.
    """

    move_attempted = pyqtSignal(object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.green()
        self._game: GameState | None = None
        self._flipped = False
        self._show_legal_moves = True
        self._best_move: UciMove | None = None

        # Drag state
        self._drag_origin: str | None = None
        self._drag_item: QGraphicsSimpleTextItem | None = None
        self._drag_offset = QPointF()
        self._highlights: dict[str, HighlightStyle] = {}

        # Visual layers
        self._square_items: dict[str, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._piece_items: dict[str, QGraphicsSimpleTextItem] = {}
        self._overlay_items: list[QGraphicsItem] = []
        self._state_items: list[QGraphicsItem] = []
        self._arrow_items: list[QGraphicsItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_game(self, game: GameState) -> None:
        """Attach the game whose position is displayed."""
        self._game = game
        self.refresh()

    def refresh(self) -> None:
        """Redraw pieces and last-move/check markers from the game."""
        self._clear_highlights()
        self._sync_pieces()
        self._draw_state_markers()

    def set_flipped(self, flipped: bool) -> None:
        self._flipped = flipped
        self._draw_board()
        self.refresh()
        self._draw_arrow()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.refresh()
        self._draw_arrow()

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible

    @property
    def best_move(self) -> UciMove | None:
        return self._best_move

    def set_best_move(self, move: UciMove | None) -> None:
        """Show (or with None, hide) the engine's suggested move arrow."""
        if move == self._best_move:
            return
        self._best_move = move
        self._draw_arrow()

    def highlights(self) -> dict[str, HighlightStyle]:
        """Overlays currently shown for an in-progress drag."""
        return dict(self._highlights)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.TILE
        font = QFont("Adwaita Sans", max(9, t // 8))

        for sq in chess.SQUARES:
            f, r = chess.square_file(sq), chess.square_rank(sq)
            is_light = (f + r) % 2 == 1
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = QGraphicsRectItem(self._square_rect(sq))
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[chess.square_name(sq)] = rect

            # Rank numbers on the left edge, file letters on the bottom edge.
            labels: list[tuple[str, QPointF]] = []
            origin = self._square_rect(sq).topLeft()
            if f == (7 if self._flipped else 0):
                labels.append((str(r + 1), origin + QPointF(2, 1)))
            if r == (7 if self._flipped else 0):
                labels.append(
                    (chess.FILE_NAMES[f], origin + QPointF(t - 12, t - 16))
                )
            label_color = (
                self._theme.dark_square if is_light else self._theme.light_square
            )
            for text, pos in labels:
                txt = QGraphicsSimpleTextItem(text)
                txt.setFont(font)
                txt.setBrush(QBrush(label_color))
                txt.setPos(pos)
                txt.setZValue(0.3)
                self.addItem(txt)
                self._coord_items.append(txt)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the game position."""
        self._clear_items(self._piece_items)
        self._drag_item = None
        self._drag_origin = None
        if self._game is None:
            return

        font = QFont("DejaVu Sans", int(self.TILE * 0.6))
        for sq in chess.SQUARES:
            name = chess.square_name(sq)
            piece = self._game.piece_at(name)
            if piece is None:
                continue
            item = QGraphicsSimpleTextItem(piece.unicode_symbol())
            item.setFont(font)
            white = piece.color == chess.WHITE
            fill, outline = (250, 250, 250), (20, 20, 20)
            if not white:
                fill, outline = (20, 20, 20), (200, 200, 200)
            item.setBrush(QBrush(QColor(*fill)))
            item.setPen(QPen(QColor(*outline), 1))
            item.setZValue(1)
            self.addItem(item)
            self._place_piece(item, sq)
            self._piece_items[name] = item

    def _place_piece(self, item: QGraphicsSimpleTextItem, sq: chess.Square) -> None:
        rect = self._square_rect(sq)
        bounds = item.boundingRect()
        item.setPos(
            rect.center().x() - bounds.width() / 2,
            rect.center().y() - bounds.height() / 2,
        )

    def _draw_state_markers(self) -> None:
        self._clear_items(self._state_items)
        if self._game is None:
            return
        last = self._game.last_move
        if last is not None:
            for name in (last.from_sq, last.to_sq):
                self._state_items.append(
                    self._make_square_overlay(name, self._theme.last_move, 0.5)
                )
        if self._game.is_check:
            king = self._game.king_square()
            if king is not None:
                self._state_items.append(
                    self._make_square_overlay(king, self._theme.highlight_check, 0.6)
                )

    def _draw_arrow(self) -> None:
        self._clear_items(self._arrow_items)
        move = self._best_move
        if move is None:
            return
        start = self._square_rect(chess.parse_square(move.from_sq)).center()
        end = self._square_rect(chess.parse_square(move.to_sq)).center()

        color = self._theme.best_move_arrow
        width = self.TILE * 0.15
        head = self.TILE * 0.4
        angle = math.atan2(end.y() - start.y(), end.x() - start.x())
        shaft_end = self._polar(end, head * 0.8, angle + math.pi)

        line = QGraphicsLineItem(start.x(), start.y(), shaft_end.x(), shaft_end.y())
        pen = QPen(color, width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        line.setPen(pen)
        line.setZValue(5)

        left = angle + math.radians(150)
        right = angle - math.radians(150)
        tip = QPolygonF(
            [
                end,
                self._polar(end, head, left),
                self._polar(end, head, right),
            ]
        )
        arrow_head = QGraphicsPolygonItem(tip)
        arrow_head.setBrush(QBrush(color))
        arrow_head.setPen(QPen(Qt.PenStyle.NoPen))
        arrow_head.setZValue(5)

        for item in (line, arrow_head):
            self.addItem(item)
            self._arrow_items.append(item)

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._game is None or event is None:
            return super().mousePressEvent(event)

        item = self._begin_drag(self._pos_to_square(event.scenePos()))
        if item is None:
            return super().mousePressEvent(event)
        self._drag_offset = event.scenePos() - item.pos()

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._drag_item is not None and event is not None:
            self._drag_item.setPos(event.scenePos() - self._drag_offset)
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._drag_origin is None or event is None:
            return super().mouseReleaseEvent(event)
        self._finish_drag(self._pos_to_square(event.scenePos()))

    def _begin_drag(self, sq: str | None) -> QGraphicsSimpleTextItem | None:
        """Pick up the piece on *sq* and show its highlights."""
        item = self._piece_items.get(sq) if sq is not None else None
        if self._game is None or sq is None or item is None:
            self._clear_highlights()
            return None
        self._show_highlights(compute_highlights(self._game, sq))
        self._drag_origin = sq
        self._drag_item = item
        item.setZValue(10)
        item.setOpacity(0.85)
        return item

    def _finish_drag(self, drop_sq: str | None) -> None:
        """Drop the dragged piece on *drop_sq* (None: off the board)."""
        origin = self._drag_origin
        self._clear_highlights()
        if origin is not None and drop_sq is not None and drop_sq != origin:
            self.move_attempted.emit(UciMove(origin, drop_sq))
        # Snap back or show the new position, whichever the game now holds.
        self.refresh()

    # ── Highlights ───────────────────────────────────────────────────────

    def _show_highlights(self, highlights: dict[str, HighlightStyle]) -> None:
        self._clear_highlights()
        t = self.TILE
        for name, style in highlights.items():
            if style is HighlightStyle.ORIGIN:
                overlay = self._make_square_overlay(
                    name, self._theme.highlight_origin, 0.8
                )
            elif not self._show_legal_moves:
                continue
            else:
                rect = self._square_rect(chess.parse_square(name))
                if style is HighlightStyle.CAPTURE_MOVE:
                    inset = t * 0.04
                    overlay = QGraphicsEllipseItem(
                        rect.adjusted(inset, inset, -inset, -inset)
                    )
                    overlay.setPen(QPen(self._theme.highlight_capture, t * 0.08))
                    overlay.setBrush(QBrush(Qt.BrushStyle.NoBrush))
                else:
                    radius = t * 0.13
                    overlay = QGraphicsEllipseItem(
                        rect.center().x() - radius,
                        rect.center().y() - radius,
                        2 * radius,
                        2 * radius,
                    )
                    overlay.setPen(QPen(Qt.PenStyle.NoPen))
                    overlay.setBrush(QBrush(self._theme.highlight_quiet))
                overlay.setZValue(0.8)
                self.addItem(overlay)
            self._overlay_items.append(overlay)
        self._highlights = highlights

    def _clear_highlights(self) -> None:
        self._clear_items(self._overlay_items)
        self._highlights = {}

    def _clear_items(self, items: list[Any] | dict[str, Any]) -> None:
        values = list(items.values()) if isinstance(items, dict) else list(items)
        for item in values:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _square_rect(self, sq: chess.Square) -> QRectF:
        """Scene rectangle covering board square *sq*."""
        t = self.TILE
        f, r = chess.square_file(sq), chess.square_rank(sq)
        col, row = (7 - f, r) if self._flipped else (f, 7 - r)
        return QRectF(col * t, row * t, t, t)

    @staticmethod
    def _polar(origin: QPointF, length: float, angle: float) -> QPointF:
        return QPointF(
            origin.x() + length * math.cos(angle),
            origin.y() + length * math.sin(angle),
        )

    def _pos_to_square(self, pos: QPointF) -> str | None:
        """Scene position → square name."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        f, r = (7 - col, row) if self._flipped else (col, 7 - row)
        return chess.square_name(chess.square(f, r))

    def _make_square_overlay(
        self, name: str, color: QColor, z: float
    ) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        rect = QGraphicsRectItem(self._square_rect(chess.parse_square(name)))
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(z)
        self.addItem(rect)
        return rect
