"""
Falling-block game engine
=========================

A deterministic, in-memory state machine for a classic 10x20 Tetris session.
It knows nothing about drawing or input devices; a host reads its state each
frame and forwards discrete intents into it.

-------------------------------------------------------------
DRIVING THE ENGINE
-------------------------------------------------------------

  • Intents : start, move_left, move_right, soft_drop, rotate, hard_drop, toggle_pause
  • Time    : tick(now_ms) applies gravity once the drop interval has elapsed
  • Queries : board, piece, next_type, score, level, lines, flags, snapshot()

Every intent runs to completion before it returns. When a downward move is
blocked (gravity, soft drop or hard drop) the piece is locked, full rows are
swept, score and level are updated and the next piece is spawned, all inside
the same call. A host never observes a half-locked board.

Disallowed intents (paused, game over, no active piece, blocked sideways move)
are ignored and return False. Rejections are logged at DEBUG.

-------------------------------------------------------------
SCORING & LEVELS
-------------------------------------------------------------

  • 1/2/3/4 rows: 40/100/300/1200 points, multiplied by the current level
  • Level = lines // 10 + 1
  • Drop interval = max(100, 1000 - 100 * (level - 1)) ms

Wrap a Game in LockedGame when more than one thread can reach it.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

import pygame

from tetris_board import Board, collide, copy_board, drop_distance, ghost_y, merge, new_board, sweep
from tetris_config import CONFIG, ROTATION_POLICIES
from tetris_piece import WALL_KICKS, Piece
from tetris_rng import UniformRandom

log = logging.getLogger(__name__)

SCORE_TABLE = (40, 100, 300, 1200)   # points for 1, 2, 3, 4+ rows, multiplied by level


def drop_interval_ms(level: int, cfg: Optional[dict] = None) -> int:
    """Milliseconds between gravity drops at the given level."""
    cfg = CONFIG if cfg is None else cfg
    return max(cfg["MIN_DROP_MS"], cfg["BASE_DROP_MS"] - (level - 1) * cfg["DROP_STEP_MS"])


@dataclass(frozen=True)
class GameState:
    board: Tuple[Tuple[Optional[str], ...], ...]
    piece: Optional[Piece]
    next_type: Optional[str]
    score: int
    level: int
    lines: int
    drop_ms: int
    started: bool
    paused: bool
    game_over: bool


class Game:
    def __init__(self, rotation: Optional[str] = None, seed: Optional[int] = None,
                 clock: Optional[Callable[[], int]] = None):
        # Per-session copy; later edits to CONFIG don't leak into a running game
        self.cfg = dict(CONFIG)
        if rotation is not None:
            self.cfg["ROTATION"] = rotation
        if seed is not None:
            self.cfg["SEED"] = seed
        if self.cfg["ROTATION"] not in ROTATION_POLICIES:
            raise ValueError(f"unknown rotation policy {self.cfg['ROTATION']!r}, "
                             f"expected one of {ROTATION_POLICIES}")

        self.rng = UniformRandom(self.cfg["SEED"])
        if clock is None:
            # get_ticks() stays at 0 until pygame is initialised
            if not pygame.get_init():
                pygame.init()
            clock = pygame.time.get_ticks
        self.clock = clock

        self._board: Board = new_board()
        self.piece: Optional[Piece] = None
        self.next_type: Optional[str] = None

        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_ms = drop_interval_ms(self.level, self.cfg)
        self.last_drop = 0

        self.started = False
        self.paused = False
        self.game_over = False

    # ---------------------------------------------------------
    # QUERIES
    # ---------------------------------------------------------

    @property
    def board(self) -> Board:
        return copy_board(self._board)

    @property
    def rotation(self) -> str:
        return self.cfg["ROTATION"]

    def ghost_y(self) -> Optional[int]:
        """Row the active piece would rest on if hard-dropped, or None without a piece."""
        if self.piece is None:
            return None
        return ghost_y(self._board, self.piece)

    def visible_board(self) -> Board:
        """Board with the active piece drawn in, as a host would render it."""
        if self.piece is None or self.game_over:
            return self.board
        return merge(self._board, self.piece)

    def snapshot(self) -> GameState:
        return GameState(
            board=tuple(tuple(row) for row in self._board),
            piece=self.piece,
            next_type=self.next_type,
            score=self.score,
            level=self.level,
            lines=self.lines,
            drop_ms=self.drop_ms,
            started=self.started,
            paused=self.paused,
            game_over=self.game_over,
        )

    # ---------------------------------------------------------
    # SESSION
    # ---------------------------------------------------------

    def _now(self, now_ms: Optional[int]) -> int:
        return self.clock() if now_ms is None else now_ms

    def start(self, now_ms: Optional[int] = None) -> bool:
        if self.started and not self.game_over:
            log.debug("start ignored: session already running")
            return False
        self._board = new_board()
        self.piece = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_ms = drop_interval_ms(self.level, self.cfg)
        self.last_drop = self._now(now_ms)
        self.started = True
        self.paused = False
        self.game_over = False

        first = self.rng.next_piece()
        self.next_type = self.rng.next_piece()
        log.info("session started: first=%s next=%s rotation=%s", first, self.next_type, self.rotation)
        self._install(first)
        return True

    def toggle_pause(self) -> bool:
        if not self.started or self.game_over:
            log.debug("pause ignored: no running session")
            return False
        self.paused = not self.paused
        return True

    def tick(self, now_ms: Optional[int] = None) -> bool:
        """Apply one gravity step if the drop interval has elapsed. Returns True if it did."""
        if not self.started or self.paused or self.game_over:
            return False
        now = self._now(now_ms)
        if now - self.last_drop <= self.drop_ms:
            return False
        self.move(0, 1)
        self.last_drop = now
        return True

    # ---------------------------------------------------------
    # MOVEMENT
    # ---------------------------------------------------------

    def _can_act(self, intent: str) -> bool:
        if self.game_over or self.paused or self.piece is None:
            log.debug("%s ignored: game_over=%s paused=%s piece=%s",
                      intent, self.game_over, self.paused, self.piece is not None)
            return False
        return True

    def move(self, dx: int, dy: int) -> bool:
        if not self._can_act("move"):
            return False
        if not collide(self._board, self.piece, dx, dy):
            self.piece = self.piece.moved(dx, dy)
            return True
        if dy > 0:
            # Only a blocked downward step lands the piece
            self.piece = replace(self.piece, landed=True)
            self._lock()
            return True
        log.debug("move (%d, %d) blocked", dx, dy)
        return False

    def move_left(self) -> bool:
        return self.move(-1, 0)

    def move_right(self) -> bool:
        return self.move(1, 0)

    def soft_drop(self) -> bool:
        return self.move(0, 1)

    def rotate(self, cw: bool = True) -> bool:
        if not self._can_act("rotate"):
            return False
        turned = self.piece.rotated(cw)
        offsets = (0,) + (WALL_KICKS if self.rotation == "wall_kick" else ())
        for dx in offsets:
            if not collide(self._board, turned, dx, 0):
                self.piece = turned.moved(dx, 0)
                return True
        log.debug("rotate blocked at (%d, %d)", self.piece.x, self.piece.y)
        return False

    def hard_drop(self) -> bool:
        if not self._can_act("hard_drop"):
            return False
        dist = drop_distance(self._board, self.piece)
        self.piece = replace(self.piece, y=self.piece.y + dist, landed=True)
        self._lock()
        return True

    # ---------------------------------------------------------
    # LOCK / SWEEP / SPAWN
    # ---------------------------------------------------------

    def _lock(self) -> None:
        board, cleared = sweep(merge(self._board, self.piece))
        self._board = board
        if cleared:
            self.score += SCORE_TABLE[min(cleared, 4) - 1] * self.level
            self.lines += cleared
            new_level = self.lines // self.cfg["LINES_PER_LEVEL"] + 1
            if new_level > self.level:
                self.level = new_level
                self.drop_ms = drop_interval_ms(new_level, self.cfg)
                log.info("level %d, drop interval %d ms", self.level, self.drop_ms)
        if self._install(self.next_type):
            self.next_type = self.rng.next_piece()

    def _install(self, t: str) -> bool:
        p = Piece.spawn(t)
        if collide(self._board, p):
            self.game_over = True
            self.started = False
            log.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)
            return False
        self.piece = p
        return True


class LockedGame:
    """Serializes every intent and query on a Game under one lock."""

    def __init__(self, game: Optional[Game] = None, **kwargs):
        self._game = game if game is not None else Game(**kwargs)
        self._lock = threading.Lock()

    def _call(self, name, *args):
        with self._lock:
            return getattr(self._game, name)(*args)

    def start(self, now_ms=None): return self._call("start", now_ms)
    def move_left(self): return self._call("move_left")
    def move_right(self): return self._call("move_right")
    def soft_drop(self): return self._call("soft_drop")
    def rotate(self, cw=True): return self._call("rotate", cw)
    def hard_drop(self): return self._call("hard_drop")
    def toggle_pause(self): return self._call("toggle_pause")
    def tick(self, now_ms=None): return self._call("tick", now_ms)
    def snapshot(self) -> GameState: return self._call("snapshot")
    def visible_board(self) -> Board: return self._call("visible_board")
    def ghost_y(self): return self._call("ghost_y")


