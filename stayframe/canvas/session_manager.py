"""
Editor Session Manager
======================

Keeps one TemplateEngine per editing session, with optional JSON snapshots
on disk so a session survives a restart.
"""

import json
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.template_models import Template
from .template_engine import EngineSnapshot, TemplateEngine

logger = logging.getLogger(__name__)

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class SessionManager:
    """Manages template engines for editor sessions."""

    def __init__(self, sessions_dir: Optional[Path] = None):
        self.sessions_dir = Path(sessions_dir) if sessions_dir else None
        if self.sessions_dir:
            self.sessions_dir.mkdir(parents=True, exist_ok=True)
        self._engines: Dict[str, TemplateEngine] = {}
        self._meta: Dict[str, Dict[str, Any]] = {}
        logger.info(f"[SESSION-MANAGER] Initialized with sessions_dir={self.sessions_dir}")

    def create_session(self, session_id: Optional[str] = None) -> str:
        """Create a new session with optional ID."""
        if session_id is None:
            session_id = str(uuid.uuid4())
        elif not _SESSION_ID.match(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")

        if session_id not in self._engines:
            self._register(session_id, TemplateEngine(), datetime.now().isoformat())
            self._save_session(session_id)
        return session_id

    def get_engine(self, session_id: str) -> Optional[TemplateEngine]:
        """Get the engine for a session, reloading it from disk if needed."""
        if session_id in self._engines:
            return self._engines[session_id]

        session_path = self._session_path(session_id)
        if session_path and session_path.exists():
            with open(session_path) as f:
                data = json.load(f)
            engine = TemplateEngine()
            if data.get("template"):
                engine.select_template(Template.from_dict(data["template"]))
            if data.get("is_development_pro_mode_active"):
                engine.toggle_development_pro_mode()
            self._register(session_id, engine, data.get("created_at"), data.get("updated_at"))
            logger.info(f"[SESSION-MANAGER] Restored session {session_id}")
            return engine
        return None

    def list_sessions(self) -> List[str]:
        session_ids = set(self._engines)
        if self.sessions_dir:
            session_ids.update(p.stem for p in self.sessions_dir.glob("*.json"))
        return sorted(session_ids)

    def close_session(self, session_id: str) -> bool:
        """Drop a session and its snapshot file."""
        found = self._engines.pop(session_id, None) is not None
        self._meta.pop(session_id, None)

        session_path = self._session_path(session_id)
        if session_path and session_path.exists():
            session_path.unlink()
            found = True
        if found:
            logger.info(f"[SESSION-MANAGER] Closed session {session_id}")
        return found

    def export_template(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Canonical dict of the session's current template, if any."""
        engine = self.get_engine(session_id)
        if engine is None or not engine.has_template:
            return None
        return engine.current_template.to_dict()

    def get_metadata(self, session_id: str) -> Optional[Dict[str, Any]]:
        if self.get_engine(session_id) is None:
            return None
        return dict(self._meta[session_id])

    def save_session(self, session_id: str) -> bool:
        """Explicitly save session to disk."""
        if session_id in self._engines and self.sessions_dir:
            self._save_session(session_id)
            return True
        return False

    def _register(
        self,
        session_id: str,
        engine: TemplateEngine,
        created_at: Optional[str],
        updated_at: Optional[str] = None,
    ) -> None:
        self._engines[session_id] = engine
        self._meta[session_id] = {
            "id": session_id,
            "created_at": created_at or datetime.now().isoformat(),
            "updated_at": updated_at,
        }

        def on_change(snapshot: EngineSnapshot) -> None:
            if session_id not in self._meta:
                return
            self._meta[session_id]["updated_at"] = datetime.now().isoformat()
            self._save_session(session_id, snapshot)

        engine.subscribe(on_change)

    def _session_path(self, session_id: str) -> Optional[Path]:
        if not self.sessions_dir or not _SESSION_ID.match(session_id):
            return None
        return self.sessions_dir / f"{session_id}.json"

    def _save_session(self, session_id: str, snapshot: Optional[EngineSnapshot] = None):
        """Save session to disk."""
        session_path = self._session_path(session_id)
        if session_path is None or session_id not in self._engines:
            return

        if snapshot is None:
            snapshot = self._engines[session_id].snapshot()

        payload = {
            **self._meta[session_id],
            "template": snapshot.template.to_dict() if snapshot.template else None,
            "is_development_pro_mode_active": snapshot.isDevelopmentProModeActive,
        }
        with open(session_path, "w") as f:
            json.dump(payload, f, indent=2)
