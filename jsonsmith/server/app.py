"""FastAPI application for jsonsmith.

This module is a thin routing layer: handlers validate input, call the
conversion facade, the repairer or the history store, and shape the
result into JSON.

Endpoints
---------
POST   /api/format          pretty-print with a given indent
POST   /api/minify          strip insignificant whitespace
POST   /api/fix             LLM syntax repair + positional line diff
POST   /api/to-yaml         JSON -> YAML
POST   /api/from-yaml       YAML -> JSON
POST   /api/to-markdown     JSON -> Markdown
POST   /api/from-markdown   JSON code blocks in Markdown -> JSON
GET    /api/history         newest saved entries (empty when history is off)
POST   /api/history         save an entry
DELETE /api/history/{id}    delete an entry

Conversion failures are returned with status 200 and ``valid: false``;
missing or oversized input is a 400.
"""

from __future__ import annotations

import logging
import secrets
import sqlite3

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from jsonsmith import __version__
from jsonsmith.config.models import JsonsmithConfig, ServerConfig
from jsonsmith.convert.facade import ConversionFacade
from jsonsmith.convert.models import ConversionFailure, ConversionResult
from jsonsmith.history.store import SQLiteHistoryStore, open_history_store
from jsonsmith.llm import LLMProvider, create_llm_provider
from jsonsmith.repair import JsonRepairer, RepairError
from jsonsmith.server.schemas import (
    ErrorResponse,
    FormatRequest,
    FormattedResponse,
    HistoryRequest,
    JsonRequest,
    MarkdownRequest,
    ResultResponse,
    YamlRequest,
)

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int = 200, valid: bool | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, valid=valid).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _size_label(limit: int) -> str:
    if limit % 1_000_000 == 0:
        return f"{limit // 1_000_000}MB"
    if limit % 1000 == 0:
        return f"{limit // 1000}kB"
    return f"{limit} chars"


def _basic_auth(server: ServerConfig):
    security = HTTPBasic(realm=server.realm)

    def verify(credentials: HTTPBasicCredentials = Depends(security)) -> None:
        user_ok = secrets.compare_digest(
            credentials.username.encode(), (server.auth_user or "").encode()
        )
        pass_ok = secrets.compare_digest(
            credentials.password.encode(), (server.auth_pass or "").encode()
        )
        if not (user_ok and pass_ok):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": f'Basic realm="{server.realm}"'},
            )

    return verify


def create_app(
    config: JsonsmithConfig | None = None,
    *,
    llm: LLMProvider | None = None,
    history: SQLiteHistoryStore | None = None,
) -> FastAPI:
    """Build the API.

    ``llm`` defaults to a provider built from ``config.llm`` on first use of
    /api/fix. ``history`` defaults to the store described by
    ``config.history``; when that is disabled or cannot be opened the
    history endpoints degrade instead of failing startup.
    """
    config = config or JsonsmithConfig()
    facade = ConversionFacade(config.yaml)
    store = history if history is not None else open_history_store(config.history)
    max_chars = config.limits.max_input_chars
    too_large = f"Input too large (max {_size_label(max_chars)})"

    dependencies = []
    if config.server.auth_enabled:
        dependencies.append(Depends(_basic_auth(config.server)))

    app = FastAPI(
        title="jsonsmith",
        description="Validate, format and convert JSON; repair syntax with an LLM.",
        version=__version__,
        dependencies=dependencies,
    )
    app.state.config = config
    app.state.history = store
    app.state.llm = llm

    def _check_input(value: object, field: str) -> JSONResponse | None:
        if not isinstance(value, str) or not value:
            return _error(f"Missing {field} field", status.HTTP_400_BAD_REQUEST)
        if len(value) > max_chars:
            return _error(too_large, status.HTTP_400_BAD_REQUEST)
        return None

    def _result(result: ConversionResult, key: str = "result"):
        if isinstance(result, ConversionFailure):
            return _error(result.message, valid=False)
        if key == "formatted":
            return FormattedResponse(formatted=result.text)
        return ResultResponse(result=result.text)

    def _get_llm() -> LLMProvider:
        if app.state.llm is None:
            app.state.llm = create_llm_provider(config.llm)
        return app.state.llm

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    @app.post("/api/format", summary="Pretty-print JSON")
    def format_route(req: FormatRequest):
        if (err := _check_input(req.text, "json")) is not None:
            return err
        return _result(facade.format(req.text, req.indent), key="formatted")

    @app.post("/api/minify", summary="Minify JSON")
    def minify_route(req: JsonRequest):
        if (err := _check_input(req.text, "json")) is not None:
            return err
        return _result(facade.minify(req.text), key="formatted")

    @app.post("/api/to-yaml", summary="Convert JSON to YAML")
    def to_yaml_route(req: JsonRequest):
        if (err := _check_input(req.text, "json")) is not None:
            return err
        return _result(facade.to_yaml(req.text))

    @app.post("/api/from-yaml", summary="Convert YAML to JSON")
    def from_yaml_route(req: YamlRequest):
        if (err := _check_input(req.yaml, "yaml")) is not None:
            return err
        return _result(facade.from_yaml(req.yaml))

    @app.post("/api/to-markdown", summary="Render JSON as Markdown")
    def to_markdown_route(req: JsonRequest):
        if (err := _check_input(req.text, "json")) is not None:
            return err
        return _result(facade.to_markdown(req.text))

    @app.post("/api/from-markdown", summary="Extract JSON from Markdown code blocks")
    def from_markdown_route(req: MarkdownRequest):
        if (err := _check_input(req.markdown, "markdown")) is not None:
            return err
        return _result(facade.from_markdown(req.markdown))

    # -------------------------------------------------------------------------
    # Repair
    # -------------------------------------------------------------------------

    @app.post("/api/fix", summary="Repair JSON syntax with an LLM")
    async def fix_route(req: JsonRequest):
        if (err := _check_input(req.text, "json")) is not None:
            return err
        try:
            provider = _get_llm()
        except ValueError as e:
            return _error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        try:
            result = await JsonRepairer(provider).repair(req.text)
        except RepairError as e:
            logger.warning("repair failed: %s", e)
            return _error(f"AI fix failed: {e}", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return {
            "fixed": result.fixed,
            "changes": [c.model_dump(by_alias=True) for c in result.changes],
            "valid": result.valid,
        }

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    @app.get("/api/history", summary="List saved entries, newest first")
    def list_history():
        if app.state.history is None:
            return []
        try:
            entries = app.state.history.list_recent(config.history.list_limit)
        except sqlite3.Error as e:
            return _error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return [entry.model_dump(mode="json") for entry in entries]

    @app.post("/api/history", summary="Save an entry")
    def add_history(req: HistoryRequest):
        if app.state.history is None:
            return _error("Database not available", status.HTTP_503_SERVICE_UNAVAILABLE)
        if not isinstance(req.content, str) or not req.content:
            return _error("Missing content", status.HTTP_400_BAD_REQUEST)
        if len(req.content) > max_chars:
            return _error(too_large, status.HTTP_400_BAD_REQUEST)
        try:
            entry = app.state.history.add(req.content, req.formatted)
        except sqlite3.Error as e:
            return _error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return entry.model_dump(mode="json")

    @app.delete("/api/history/{entry_id}", summary="Delete an entry")
    def delete_history(entry_id: str):
        if app.state.history is None:
            return _error("Database not available", status.HTTP_503_SERVICE_UNAVAILABLE)
        try:
            app.state.history.delete(entry_id)
        except sqlite3.Error as e:
            return _error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return {"ok": True}

    return app
