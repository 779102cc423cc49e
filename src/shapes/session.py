"""
The GameSession class is the entrypoint into the domain layer for the service layer.
It is responsible for the state of one drawing match: who plays, which shape is being drawn, how much time is left,
and who won. The service layer decides *which* session a command applies to; this module decides *whether* it applies.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import (
    GameFullError,
    InvalidSessionStateError,
    PlayerAlreadyInSessionError,
    PlayerNotInSessionError,
    ShapeNotConfiguredError,
)
from src.core.models import SessionModel
from src.core.shared_types import (
    DEFAULT_DIFFICULTY,
    Difficulty,
    PlayerSlot,
    SessionStatus,
    ShapeTitle,
)
from src.shapes.catalog import DifficultyCatalog, RoundConfiguration
from src.shapes.shape import Pixel, Shape

logger = logging.getLogger(__name__)

# Wall clock in seconds. Injected, so tests can control elapsed time.
Clock = Callable[[], float]


@dataclass
class SessionMove:
    """A full snapshot of one side's drawing. Routed by slot, not by who sent it."""

    player_slot: PlayerSlot
    pixels: list[Pixel]


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    catalog: DifficultyCatalog = field(repr=False, compare=False)
    clock: Clock = field(repr=False, compare=False)
    session_id: UUID
    status: SessionStatus
    difficulty: Difficulty
    round_budget: float
    last_timestamp: float = 0.0
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    reference_shape: Optional[Shape] = None
    player1_shape: Optional[Shape] = None
    player2_shape: Optional[Shape] = None
    player1_accuracy: Optional[float] = None
    player2_accuracy: Optional[float] = None
    winner_id: Optional[str] = None

    @classmethod
    def new_session(
        cls, catalog: DifficultyCatalog, clock: Clock = time.time
    ) -> Self:
        """An empty session waiting for its first player, with the default difficulty's round budget."""
        return cls(
            catalog=catalog,
            clock=clock,
            session_id=uuid4(),
            status=SessionStatus.WAITING_TO_START,
            difficulty=DEFAULT_DIFFICULTY,
            round_budget=catalog.round_budget(DEFAULT_DIFFICULTY),
        )

    @classmethod
    def from_model(
        cls, model: SessionModel, catalog: DifficultyCatalog, clock: Clock = time.time
    ) -> Self:
        """Define how to construct a GameSession from the information the Service layer actually has"""

        # Validation
        if model.status not in SessionStatus.__members__:
            raise InvalidSessionStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(SessionStatus)}"
            )
        difficulty = Difficulty(model.difficulty)

        def _shape(pairs: Optional[list[tuple[float, float]]]) -> Optional[Shape]:
            if pairs is None or model.shape_title is None:
                return None
            return Shape(
                ShapeTitle(model.shape_title),
                difficulty,
                [Pixel.from_pair(pair) for pair in pairs],
            )

        return cls(
            catalog=catalog,
            clock=clock,
            session_id=model.session_id,
            status=SessionStatus(model.status),
            difficulty=difficulty,
            round_budget=model.round_budget,
            last_timestamp=model.last_timestamp,
            player1_id=model.player1_id,
            player2_id=model.player2_id,
            reference_shape=_shape(model.reference_pixels),
            player1_shape=_shape(model.player1_pixels),
            player2_shape=_shape(model.player2_pixels),
            player1_accuracy=model.player1_accuracy,
            player2_accuracy=model.player2_accuracy,
            winner_id=model.winner_id,
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""

        return SessionModel(
            session_id=self.session_id,
            status=self.status.value,
            difficulty=self.difficulty.value,
            round_budget=self.round_budget,
            last_timestamp=self.last_timestamp,
            player1_id=self.player1_id,
            player2_id=self.player2_id,
            shape_title=(
                self.reference_shape.title.value if self.reference_shape else None
            ),
            reference_pixels=(
                self.reference_shape.pixel_pairs() if self.reference_shape else None
            ),
            player1_pixels=(
                self.player1_shape.pixel_pairs() if self.player1_shape else None
            ),
            player2_pixels=(
                self.player2_shape.pixel_pairs() if self.player2_shape else None
            ),
            player1_accuracy=self.player1_accuracy,
            player2_accuracy=self.player2_accuracy,
            winner_id=self.winner_id,
        )

    @property
    def players(self) -> list[str]:
        return [p for p in (self.player1_id, self.player2_id) if p is not None]

    @property
    def is_over(self) -> bool:
        return self.status == SessionStatus.OVER

    def join(self, player_id: str) -> None:
        """
        First player to join takes slot 1, the second one slot 2.
        Filling the second slot moves the session to IN_PROGRESS and rolls a shape for the current difficulty.
        """
        if player_id in self.players:
            raise PlayerAlreadyInSessionError(
                f"Player {player_id!r} already joined session {self.session_id}."
            )
        if len(self.players) == 2:
            raise GameFullError(f"Session {self.session_id} already has two players.")

        if self.player1_id is None:
            self.player1_id = player_id
            return

        # roll before touching any state: a missing shape asset must not leave a half-joined session behind
        configuration = self.catalog.configure(self.difficulty)
        self.player2_id = player_id
        self._apply_configuration(self.difficulty, configuration)
        self._change_status(SessionStatus.IN_PROGRESS)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Players picked a (new) difficulty before starting the round."""
        if self.status != SessionStatus.IN_PROGRESS:
            raise InvalidSessionStateError(
                f"Difficulty can only be changed before the round starts. status: {self.status}"
            )
        self.configure_difficulty(difficulty)

    def configure_difficulty(self, difficulty: Difficulty) -> None:
        """Roll a reference shape and hand out two fresh, empty drawings. Does not look at the status."""
        configuration = self.catalog.configure(difficulty)
        self._apply_configuration(difficulty, configuration)

    def start(self) -> None:
        """Start the clock."""
        if self.status != SessionStatus.IN_PROGRESS:
            raise InvalidSessionStateError(
                f"Session cannot be started. status: {self.status}"
            )
        self.last_timestamp = self.clock()
        self._change_status(SessionStatus.GAME_STARTED)

    def apply_move(self, move: SessionMove) -> None:
        """
        Accept a drawing snapshot
        -----

        1. replace the pixels of the slot named in the move
        2. take the time elapsed since the last update off the round budget
        3. budget used up? score both drawings and end the round

        NOTE the round never ends on its own: the budget is only checked when a move comes in.
        """
        if (
            self.reference_shape is None
            or self.player1_shape is None
            or self.player2_shape is None
        ):
            raise ShapeNotConfiguredError(
                f"Session {self.session_id} has no shapes yet. Pick a difficulty first."
            )
        if self.status != SessionStatus.GAME_STARTED:
            raise InvalidSessionStateError(
                f"Drawings are only accepted while the round is running. status: {self.status}"
            )

        target = (
            self.player1_shape
            if move.player_slot == PlayerSlot.ONE
            else self.player2_shape
        )
        target.add_pixels(move.pixels)

        self._update_round_budget()
        if self.round_budget <= 0:
            self._end_round()

    def leave(self, player_id: str) -> None:
        """
        Remove a player.
        Alone in the session? Everything is reset, as if the session was just created.
        Two players? The one who stays wins, whatever the drawings look like.
        """
        if player_id not in self.players:
            raise PlayerNotInSessionError(
                f"Player {player_id!r} is not part of session {self.session_id}."
            )
        if self.is_over:
            raise InvalidSessionStateError(f"Session {self.session_id} is already over.")

        if self.player2_id is None:
            self._reset()
            return

        winner = self.player2_id if player_id == self.player1_id else self.player1_id
        self._lock_in_accuracies()
        self.winner_id = winner
        self._change_status(SessionStatus.OVER)

    # -- PRIVATE HELPERS ---
    def _apply_configuration(
        self, difficulty: Difficulty, configuration: RoundConfiguration
    ) -> None:
        reference = configuration.reference_shape
        self.difficulty = difficulty
        self.reference_shape = reference
        # two separate objects: one player's drawing must never show up in the other's
        self.player1_shape = Shape(reference.title, difficulty)
        self.player2_shape = Shape(reference.title, difficulty)
        self.round_budget = configuration.round_budget

    def _update_round_budget(self) -> None:
        now = self.clock()
        self.round_budget -= now - self.last_timestamp
        self.last_timestamp = now

    def _end_round(self) -> None:
        self._lock_in_accuracies()
        # NOTE a tie goes to player 2
        self.winner_id = (
            self.player1_id
            if self.player1_accuracy > self.player2_accuracy
            else self.player2_id
        )
        self._change_status(SessionStatus.OVER)
        logger.info(
            "Round over in session %s: %.3f vs %.3f, winner %s",
            self.session_id,
            self.player1_accuracy,
            self.player2_accuracy,
            self.winner_id,
        )

    def _lock_in_accuracies(self) -> None:
        if (
            self.reference_shape is None
            or self.player1_shape is None
            or self.player2_shape is None
        ):
            self.player1_accuracy = 0.0
            self.player2_accuracy = 0.0
            return
        self.player1_accuracy = self.reference_shape.accuracy(self.player1_shape)
        self.player2_accuracy = self.reference_shape.accuracy(self.player2_shape)

    def _reset(self) -> None:
        self.player1_id = None
        self.player2_id = None
        self.difficulty = DEFAULT_DIFFICULTY
        self.round_budget = self.catalog.round_budget(DEFAULT_DIFFICULTY)
        self.last_timestamp = 0.0
        self.reference_shape = None
        self.player1_shape = None
        self.player2_shape = None
        self.player1_accuracy = None
        self.player2_accuracy = None
        self.winner_id = None
        self._change_status(SessionStatus.WAITING_TO_START)

    def _change_status(self, new_status: SessionStatus) -> None:
        self.status = new_status
