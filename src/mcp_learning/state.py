"""In-memory demonstration state shared by the learning tools and resources."""

import copy
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

THEMES = ("light", "dark")
DIFFICULTIES = ("beginner", "intermediate", "advanced")

TOTAL_DAYS = 7
MINUTES_PER_DAY = 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def default_config() -> Dict[str, Any]:
    return {
        "theme": "light",
        "language": "en",
        "difficulty": "beginner",
        "preferences": {
            "showHints": True,
            "enableBonusChallenges": False,
            "autoSave": True,
        },
    }


def default_progress() -> Dict[str, Any]:
    return {
        "currentDay": 3,
        "completedDays": [1, 2],
        "totalDays": TOTAL_DAYS,
        "skillsLearned": [
            "MCP server setup",
            "Basic tool creation",
            "Input validation",
            "Error handling",
            "Multi-tool development",
        ],
        "challengesCompleted": [
            "greeting-tool-basic",
            "greeting-tool-time-aware",
            "calculator-with-validation",
            "text-analyzer-advanced",
        ],
        "timeSpent": 180,
    }


_PREFERENCE_KEYS = {
    "show_hints": "showHints",
    "enable_bonus_challenges": "enableBonusChallenges",
    "auto_save": "autoSave",
}


class LearningStore:
    """Owner of the mutable learning state.

    All reads and writes go through one lock, and every value handed out is
    a deep copy, so handlers running on different worker threads never see a
    half-applied update.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        progress: Optional[Dict[str, Any]] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        """Initialize the store.

        Args:
            config: Initial user configuration (defaults to default_config())
            progress: Initial learning progress (defaults to default_progress())
            clock: Callable returning the current time, for access timestamps
        """
        self._lock = threading.Lock()
        self._config = copy.deepcopy(config) if config is not None else default_config()
        self._progress = copy.deepcopy(progress) if progress is not None else default_progress()
        self._access_log: List[Dict[str, Any]] = []
        self._clock = clock

    def config_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._config)

    def update_config(self, **changes: Any) -> Dict[str, Any]:
        """Apply configuration changes.

        Args:
            **changes: ``theme``, ``language``, ``difficulty`` and the
                preference flags ``show_hints``, ``enable_bonus_challenges``,
                ``auto_save``; None values are ignored

        Returns:
            The configuration after the update

        Raises:
            ValueError: On an unknown key or an invalid theme/difficulty
        """
        updates = {k: v for k, v in changes.items() if v is not None}
        unknown = set(updates) - {"theme", "language", "difficulty"} - set(_PREFERENCE_KEYS)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        if "theme" in updates and updates["theme"] not in THEMES:
            raise ValueError(f"Invalid theme: {updates['theme']}")
        if "difficulty" in updates and updates["difficulty"] not in DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {updates['difficulty']}")

        with self._lock:
            for key in ("theme", "language", "difficulty"):
                if key in updates:
                    self._config[key] = updates[key]
            for key, pref in _PREFERENCE_KEYS.items():
                if key in updates:
                    self._config["preferences"][pref] = bool(updates[key])
            return copy.deepcopy(self._config)

    def progress_snapshot(self) -> Dict[str, Any]:
        """Learning progress with derived completion figures."""
        with self._lock:
            progress = copy.deepcopy(self._progress)

        completed = len(progress["completedDays"])
        total = progress["totalDays"]
        progress["progressPercentage"] = round(completed / total * 100)
        if progress["currentDay"] <= total:
            progress["nextMilestone"] = f"Complete Day {progress['currentDay']}"
        else:
            progress["nextMilestone"] = "All days completed!"
        progress["estimatedTimeRemaining"] = (total - completed) * MINUTES_PER_DAY
        return progress

    def mark_day_complete(
        self,
        day: int,
        skills: Iterable[str] = (),
        time_spent: float = 0
    ) -> Dict[str, Any]:
        """Record a finished day.

        Args:
            day: Day number, 1 to totalDays
            skills: Newly learned skills to append
            time_spent: Minutes to add to the running total

        Returns:
            Progress snapshot after the update
        """
        with self._lock:
            total = self._progress["totalDays"]
            if not 1 <= day <= total:
                raise ValueError(f"Day must be between 1 and {total}")
            if day not in self._progress["completedDays"]:
                self._progress["completedDays"].append(day)
            self._progress["skillsLearned"].extend(skills)
            self._progress["timeSpent"] += time_spent
            self._progress["currentDay"] = max(day + 1, self._progress["currentDay"])

        return self.progress_snapshot()

    def record_access(self, uri: str) -> None:
        with self._lock:
            now = self._clock()
            for entry in self._access_log:
                if entry["uri"] == uri:
                    entry["accessCount"] += 1
                    entry["timestamp"] = now
                    return
            self._access_log.append({"uri": uri, "timestamp": now, "accessCount": 1})

    def analytics(self) -> Dict[str, Any]:
        """Summarize resource reads recorded so far."""
        with self._lock:
            log = copy.deepcopy(self._access_log)
            now = self._clock()

        by_count = sorted(log, key=lambda entry: entry["accessCount"], reverse=True)
        recent = sorted(log, key=lambda entry: entry["timestamp"], reverse=True)[:10]
        return {
            "totalAccesses": sum(entry["accessCount"] for entry in log),
            "uniqueResources": len(log),
            "mostAccessedResource": by_count[0]["uri"] if by_count else "none",
            "accessLog": [
                dict(entry, timestamp=entry["timestamp"].isoformat()) for entry in recent
            ],
            "generatedAt": now.isoformat(),
        }
