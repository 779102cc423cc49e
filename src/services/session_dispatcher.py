"""Orchestration of commands coming in for one interactable area, into its game session (and the reverse direction: snapshots to observers)."""

import logging
import threading
import time
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    AreaSnapshot,
    JoinSessionCommand,
    JoinSessionResponse,
    LeaveSessionCommand,
    MatchResultResponse,
    PixelModel,
    PlayerScoreResponse,
    SessionResponse,
    SetDifficultyCommand,
    ShapeResponse,
    StartSessionCommand,
    SubmitPixelsCommand,
)
from src.core.exceptions import (
    GameError,
    GameIdMismatchError,
    GameNotInProgressError,
    InvalidCommandError,
)
from src.core.models import MatchResult, Participant, PlayerScore, SessionModel
from src.db.repository import MatchHistoryRepository
from src.shapes.catalog import DifficultyCatalog
from src.shapes.session import Clock, GameSession, SessionMove
from src.shapes.shape import Pixel, Shape

logger = logging.getLogger(__name__)

Observer = Callable[[AreaSnapshot], None]


class SessionDispatcher:
    """
    Orchestration of layers for one drawing area.
    ----

    Holds at most one GameSession at a time and replaces it (never reuses it) once a match is over.
    Commands are handled one at a time: `handle` is a single critical section per area.
    """

    def __init__(
        self,
        area_id: str,
        catalog: DifficultyCatalog,
        clock: Clock = time.time,
        repository: Optional[MatchHistoryRepository] = None,
    ) -> None:
        self.area_id = area_id
        self.catalog = catalog
        self.clock = clock
        self.repo = repository
        self.active_session: Optional[GameSession] = None
        self._history: list[MatchResult] = (
            repository.list_results(area_id) if repository else []
        )
        self._recorded: set[UUID] = {result.session_id for result in self._history}
        self._occupants: dict[str, Participant] = {}
        self._observers: list[Observer] = []
        self._lock = threading.RLock()

    @property
    def match_history(self) -> list[MatchResult]:
        return list(self._history)

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._observers.remove(observer)

    # -- Command handling ---
    def handle(
        self, command: object, participant: Participant
    ) -> Optional[JoinSessionResponse]:
        """
        Apply one command on behalf of `participant`.

        On success observers are notified (and a finished match is recorded). On failure the error propagates
        and nothing changes: the session is put back as it was, no history entry, no notification.
        Recording a finished match is part of the command: when the history cannot be written, the command fails.
        """
        with self._lock:
            command_type = type(command).__name__
            logger.debug(
                "Area %s: %s from %s", self.area_id, command_type, participant.id
            )
            previous = self.active_session
            backup = previous.to_model() if previous else None
            try:
                response = self._dispatch(command, participant)
                self._record_if_over()
            except GameError as e:
                self._restore(backup)
                logger.warning(
                    "Area %s: rejected %s from %s (%s): %s",
                    self.area_id,
                    command_type,
                    participant.id,
                    e.kind,
                    e,
                )
                raise
            self._occupants[participant.id] = participant
            self._notify_observers()
            return response

    def snapshot(self) -> AreaSnapshot:
        """Read-only view of the area, as sent to observers."""
        with self._lock:
            return AreaSnapshot(
                area_id=self.area_id,
                session=(
                    self._create_session_response(self.active_session)
                    if self.active_session
                    else None
                ),
                history=[self._create_result_response(r) for r in self._history],
            )

    def _dispatch(
        self, command: object, participant: Participant
    ) -> Optional[JoinSessionResponse]:
        if isinstance(command, JoinSessionCommand):
            return self._join(participant)

        if isinstance(command, SetDifficultyCommand):
            self._require_session(command.session_id).set_difficulty(
                command.difficulty
            )
        elif isinstance(command, StartSessionCommand):
            self._require_session(command.session_id).start()
        elif isinstance(command, SubmitPixelsCommand):
            session = self._require_session(command.session_id)
            move = SessionMove(
                player_slot=command.move.player_slot,
                pixels=[Pixel(p.x, p.y) for p in command.move.pixels],
            )
            session.apply_move(move)
        elif isinstance(command, LeaveSessionCommand):
            self._require_session(command.session_id).leave(participant.id)
        else:
            raise InvalidCommandError(f"Unknown command: {type(command).__name__}")
        return None

    def _join(self, participant: Participant) -> JoinSessionResponse:
        """Join the current session, or a brand new one when there is none or the last match is over."""
        session = self.active_session
        if session is None or session.is_over:
            session = GameSession.new_session(self.catalog, self.clock)
            session.configure_difficulty(session.difficulty)
            session.join(participant.id)
            # only take over the new session once the join went through
            self.active_session = session
            logger.info(
                "Area %s: new session %s created", self.area_id, session.session_id
            )
        else:
            session.join(participant.id)
        return JoinSessionResponse(session_id=session.session_id)

    def _require_session(self, session_id: UUID) -> GameSession:
        session = self.active_session
        if session is None:
            raise GameNotInProgressError(f"No game in progress in area {self.area_id}.")
        if session.session_id != session_id:
            raise GameIdMismatchError(
                f"Session {session_id} is not the active session of area {self.area_id}."
            )
        return session

    # -- State updates ---
    def _record_if_over(self) -> None:
        """Record a match the first time it is seen as over."""
        session = self.active_session
        if (
            session is not None
            and session.is_over
            and session.session_id not in self._recorded
        ):
            self._record_result(session)

    def _restore(self, backup: Optional[SessionModel]) -> None:
        """Put the session back the way it was before a failed command."""
        self.active_session = (
            GameSession.from_model(backup, self.catalog, self.clock)
            if backup is not None
            else None
        )

    def _notify_observers(self) -> None:
        """A failing observer is logged and skipped, the others still get the snapshot."""
        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Area %s: observer %r failed", self.area_id, observer)

    def _record_result(self, session: GameSession) -> None:
        player1 = session.player1_id or ""
        player2 = session.player2_id or ""
        name1 = self._display_name(player1)
        name2 = self._display_name(player2)
        if name1 == name2:
            # two occupants with the same name would end up as a single entry
            name1, name2 = player1, player2

        result = MatchResult(
            session_id=session.session_id,
            difficulty=session.difficulty.value,
            scores={
                name1: PlayerScore(
                    win=int(session.winner_id == player1),
                    accuracy=session.player1_accuracy or 0.0,
                ),
                name2: PlayerScore(
                    win=int(session.winner_id == player2),
                    accuracy=session.player2_accuracy or 0.0,
                ),
            },
        )
        if self.repo is not None:
            self.repo.add_result(self.area_id, result)
        self._history.append(result)
        self._recorded.add(session.session_id)
        logger.info(
            "Area %s: session %s finished, winner %s",
            self.area_id,
            session.session_id,
            self._display_name(session.winner_id or ""),
        )

    def _display_name(self, player_id: str) -> str:
        participant = self._occupants.get(player_id)
        return participant.display_name if participant else player_id

    # -- Internal helpers --
    def _create_session_response(self, session: GameSession) -> SessionResponse:
        """Convert a GameSession into a SessionResponse."""
        return SessionResponse(
            session_id=session.session_id,
            status=session.status,
            difficulty=session.difficulty,
            round_budget=session.round_budget,
            player1_id=session.player1_id,
            player2_id=session.player2_id,
            reference_shape=self._create_shape_response(session.reference_shape),
            player1_shape=self._create_shape_response(session.player1_shape),
            player2_shape=self._create_shape_response(session.player2_shape),
            player1_accuracy=session.player1_accuracy,
            player2_accuracy=session.player2_accuracy,
            winner_id=session.winner_id,
        )

    def _create_shape_response(self, shape: Optional[Shape]) -> Optional[ShapeResponse]:
        if shape is None:
            return None
        return ShapeResponse(
            title=shape.title,
            difficulty=shape.difficulty,
            pixels=[PixelModel(x=p.x, y=p.y) for p in shape.pixels],
        )

    def _create_result_response(self, result: MatchResult) -> MatchResultResponse:
        return MatchResultResponse(
            session_id=result.session_id,
            difficulty=result.difficulty,
            scores={
                name: PlayerScoreResponse(win=score.win, accuracy=score.accuracy)
                for name, score in result.scores.items()
            },
        )
