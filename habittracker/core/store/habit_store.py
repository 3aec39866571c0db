"""In-memory habit store with whole-snapshot persistence.

The store owns every ``User`` and serialises access itself: a lock per user
guards mutations of that user, and the store-wide write lock is held across
every mutation plus the save, so the snapshot never sees a user mid-change.
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from habittracker.core.errors import NotFoundError, PersistenceError, ValidationError
from habittracker.core.store.persistence import Snapshot, SnapshotBackend
from habittracker.core.users.models import User
from habittracker.core.utils.dates import Clock, DateLike, local_today, to_iso
from habittracker.domains.habits.models.habit_models import DEFAULT_CATEGORY, Habit
from habittracker.domains.habits.services import generate_analytics, update_streaks

logger = logging.getLogger(__name__)


class HabitStore:
    def __init__(
        self,
        backend: SnapshotBackend,
        *,
        today: Clock = local_today,
        strict_persistence: bool = False,
    ) -> None:
        self.backend = backend
        self.today = today
        self.strict_persistence = strict_persistence
        self._users: Dict[str, User] = {}
        self._user_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------ locking
    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            if user_id not in self._users:
                raise NotFoundError("User not found")
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.Lock()
            return lock

    @contextmanager
    def _locked_user(self, user_id: str) -> Iterator[User]:
        with self._lock_for(user_id):
            yield self._users[user_id]

    # -------------------------------------------------------------- persistence
    def load(self) -> int:
        """Replace in-memory state with the backend snapshot."""
        raw = self.backend.load()
        users = {}
        for user_id, data in raw.items():
            try:
                users[str(user_id)] = User.from_dict({"id": user_id, **data})
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed user record %s", user_id)
        with self._registry_lock:
            self._users = users
        logger.info("Loaded %d users from snapshot", len(users))
        return len(users)

    def _serialize(self) -> Snapshot:
        # Caller holds _write_lock, so no user is mid-mutation.
        with self._registry_lock:
            users = list(self._users.values())
        return {user.id: user.to_dict() for user in users}

    def snapshot(self) -> Snapshot:
        with self._write_lock:
            return self._serialize()

    def _persist(self) -> None:
        """Save the full snapshot. Caller holds ``_write_lock``."""
        try:
            self.backend.save(self._serialize())
        except PersistenceError:
            if self.strict_persistence:
                raise
            # In-memory state is kept; durability is best-effort.
            logger.exception("Snapshot persistence failed")

    # ---------------------------------------------------------------- users
    def create_user(self) -> User:
        user = User(id=str(uuid.uuid4()))
        with self._write_lock:
            with self._registry_lock:
                self._users[user.id] = user
            self._persist()
        logger.info("Created user %s", user.id)
        return user

    def user_exists(self, user_id: str) -> bool:
        with self._registry_lock:
            return user_id in self._users

    def get_user(self, user_id: str) -> User:
        with self._registry_lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def user_snapshot(self, user_id: str) -> dict:
        """Serialised copy of one user, taken under that user's lock."""
        with self._locked_user(user_id) as user:
            return user.to_dict()

    def user_count(self) -> int:
        with self._registry_lock:
            return len(self._users)

    # ---------------------------------------------------------------- habits
    def add_habit(
        self,
        user_id: str,
        name: str,
        description: Optional[str] = "",
        category: Optional[str] = DEFAULT_CATEGORY,
    ) -> Habit:
        # Lock order: user lock, then write lock.
        with self._locked_user(user_id) as user, self._write_lock:
            name_norm = (name or "").strip()
            if not name_norm:
                raise ValidationError("Habit name is required")
            habit = Habit(
                id=str(uuid.uuid4()),
                name=name_norm,
                description=description or "",
                category=(category or "").strip() or DEFAULT_CATEGORY,
            )
            user.habits[habit.id] = habit
            user.stats.total_habits += 1
            self._persist()
        logger.info("User %s added habit %s (%s)", user_id, habit.id, habit.category)
        return habit

    def complete_habit(
        self, user_id: str, habit_id: str, day: Optional[DateLike] = None
    ) -> Habit:
        """Mark ``habit_id`` done on ``day`` (default today). Idempotent per date."""
        today = self.today()
        completion_day = to_iso(day) if day is not None else today.isoformat()
        with self._locked_user(user_id) as user, self._write_lock:
            habit = user.habits.get(habit_id)
            if habit is None:
                raise NotFoundError("Habit not found")
            if not habit.add_completion(completion_day):
                return habit
            user.stats.total_completions += 1
            update_streaks(user, today)
            self._persist()
        logger.info("User %s completed habit %s on %s", user_id, habit_id, completion_day)
        return habit

    # ------------------------------------------------------------- analytics
    def analytics(self, user_id: str) -> dict:
        with self._locked_user(user_id) as user:
            return generate_analytics(user, self.today())
