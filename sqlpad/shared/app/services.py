"""Application service container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlpad.domains.connections.app.session import SqliteSession
from sqlpad.domains.explorer.app.schema_service import SchemaService
from sqlpad.domains.query.app.dispatch import QueryDispatcher
from sqlpad.domains.query.store import FileHistoryStore, HistoryIdentity, HistoryStoreProtocol, history_identity
from sqlpad.shared.app.runtime import RuntimeConfig


@dataclass
class AppServices:
    """Everything the workspace and app need, built once at startup."""

    runtime: RuntimeConfig
    database_path: Path
    identity: HistoryIdentity
    history_store: HistoryStoreProtocol
    session: SqliteSession
    schema_service: SchemaService
    dispatcher: QueryDispatcher

    def close(self) -> None:
        self.dispatcher.cancel()
        self.session.close()


def build_app_services(
    runtime: RuntimeConfig,
    database_path: str | Path,
    *,
    history_store: HistoryStoreProtocol | None = None,
    session: SqliteSession | None = None,
) -> AppServices:
    path = Path(database_path)
    session = session or SqliteSession.open(path)
    return AppServices(
        runtime=runtime,
        database_path=path,
        identity=history_identity(path),
        history_store=history_store or FileHistoryStore(runtime.history_root),
        session=session,
        schema_service=SchemaService(session.fetch_schema),
        dispatcher=QueryDispatcher(session, runtime.max_rows),
    )
