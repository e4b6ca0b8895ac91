import threading
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from .models import PROJECT_TYPES, ProjectDraft, ProjectRecord, utc_now


MutationListener = Callable[[], None]


class InMemoryProjectStore:
    """Newest-first project records for one session. Nothing outlives the process."""

    storage_name = "memory"

    def __init__(self) -> None:
        self._projects: List[ProjectRecord] = []
        self._listeners: List[MutationListener] = []
        self._revision = 0
        self._lock = threading.Lock()

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def subscribe(self, listener: MutationListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()

    def add(self, draft: ProjectDraft) -> ProjectRecord:
        record = ProjectRecord(
            id=str(uuid.uuid4()),
            name=draft.name,
            description=draft.description,
            learnings=draft.learnings,
            type=draft.type,
            fix_plan=draft.fix_plan,
            created_at=utc_now(),
        )
        with self._lock:
            self._projects.insert(0, record)
            self._revision += 1
        self._notify()
        return record

    def remove(self, project_id: str) -> None:
        with self._lock:
            self._projects = [record for record in self._projects if record.id != project_id]
            self._revision += 1
        self._notify()

    def get(self, project_id: str) -> Optional[ProjectRecord]:
        with self._lock:
            for record in self._projects:
                if record.id == project_id:
                    return record
        return None

    def list(self, project_type: Optional[str] = None) -> List[ProjectRecord]:
        with self._lock:
            if project_type is None:
                return list(self._projects)
            return [record for record in self._projects if record.type == project_type]

    def snapshot(self) -> Tuple[Tuple[ProjectRecord, ...], int]:
        """Return the records together with the revision they belong to."""
        with self._lock:
            return tuple(self._projects), self._revision

    def counts(self) -> Dict[str, int]:
        with self._lock:
            counts = {project_type: 0 for project_type in PROJECT_TYPES}
            for record in self._projects:
                counts[record.type] += 1
            return counts
