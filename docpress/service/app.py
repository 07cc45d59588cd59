"""FastAPI application entrypoint for docpress service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..aggregator import BatchEntry, ResultAggregator
from ..batch import BatchItem, BatchRunner, BuildReport
from ..culture import resolve_locale
from ..dispatcher import Dispatcher, DispatchOutcome
from ..docnode import InputError
from ..generators import discover_generators
from ..loader import parse_item
from ..models import InvalidSymbolError, OutputLanguage
from ..registry import GeneratorRegistry
from ..results import Failure, Markup, NotApplicable, NotApplicableReason


class SymbolPayload(BaseModel):
    """A symbol descriptor as accepted by the batch manifest."""

    model_config = {"extra": "allow"}

    kind: str
    documentation: Optional[str] = None


class RenderRequest(BaseModel):
    symbol: SymbolPayload
    language: str = OutputLanguage.CSHARP.value
    locale: Optional[str] = None


class RenderResponse(BaseModel):
    symbol: str
    kind: str
    status: str
    generator: Optional[str] = None
    markup: Optional[str] = None
    reason: Optional[str] = None
    detail: Optional[str] = None
    failures: List[Dict[str, str]] = Field(default_factory=list)


class BuildRequest(BaseModel):
    symbols: List[SymbolPayload]
    language: str = OutputLanguage.CSHARP.value
    locale: Optional[str] = None
    workers: int = Field(default=4, ge=1)
    max_failures: Optional[int] = Field(default=None, ge=1)


class BuildResponse(BaseModel):
    summary: Dict[str, Any]
    entries: List[RenderResponse]


class GeneratorInfo(BaseModel):
    name: str
    languages: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_registry() -> GeneratorRegistry:
    registry = GeneratorRegistry()
    for generator in discover_generators():
        registry.register(generator)
    return registry


def create_app(
    registry_factory: Callable[[], GeneratorRegistry] = _default_registry,
) -> FastAPI:
    """Create the FastAPI application exposing docpress rendering."""

    app = FastAPI(title="DocPress Service", version="1.0.0")
    registry = registry_factory()

    async def get_registry() -> GeneratorRegistry:
        return registry

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/generators", response_model=List[GeneratorInfo])
    async def list_generators(
        registry: GeneratorRegistry = Depends(get_registry),
    ) -> List[GeneratorInfo]:
        return [
            GeneratorInfo(
                name=generator.name,
                languages=sorted(language.value for language in generator.languages),
            )
            for generator in registry.generators
        ]

    @app.post("/render", response_model=RenderResponse)
    async def render(
        payload: RenderRequest,
        registry: GeneratorRegistry = Depends(get_registry),
    ) -> RenderResponse:
        item = parse_item(payload.symbol.model_dump())
        language = OutputLanguage.parse(payload.language)
        dispatcher = Dispatcher(registry)

        def _run_render() -> DispatchOutcome:
            return dispatcher.dispatch(item.symbol, item.documentation, language, payload.locale)

        outcome = await asyncio.get_running_loop().run_in_executor(None, _run_render)
        # Same markup validation as /build, so both report malformed output alike.
        return _entry_response(ResultAggregator(1).record(0, outcome))

    @app.post("/build", response_model=BuildResponse)
    async def build(
        payload: BuildRequest,
        registry: GeneratorRegistry = Depends(get_registry),
    ) -> BuildResponse:
        items: List[BatchItem] = [
            parse_item(symbol.model_dump(), position) for position, symbol in enumerate(payload.symbols)
        ]
        language = OutputLanguage.parse(payload.language)
        runner = BatchRunner(
            Dispatcher(registry),
            workers=payload.workers,
            max_failures=payload.max_failures,
        )

        def _run_build() -> BuildReport:
            return runner.run(items, language, resolve_locale(payload.locale))

        report = await asyncio.get_running_loop().run_in_executor(None, _run_build)
        return BuildResponse(
            summary=report.summary.to_dict(),
            entries=[_entry_response(entry) for entry in report.entries],
        )

    @app.exception_handler(InvalidSymbolError)
    async def invalid_symbol_handler(_: Any, exc: InvalidSymbolError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(InputError)
    async def input_error_handler(_: Any, exc: InputError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    return app


def _entry_response(entry: BatchEntry) -> RenderResponse:
    if entry.result is None:
        return RenderResponse(symbol=entry.symbol_id, kind=entry.kind.value, status=entry.status.value)
    response = _render_response(entry.symbol_id, entry.kind.value, entry.result, entry.generator, entry.failures)
    response.status = entry.status.value
    return response


def _render_response(
    symbol_id: str,
    kind: str,
    result: Markup | NotApplicable | Failure,
    generator: Optional[str],
    failures: List[Failure],
) -> RenderResponse:
    response = RenderResponse(
        symbol=symbol_id,
        kind=kind,
        status="markup",
        failures=[
            {"generator": item.generator, "error_type": item.error_type, "message": item.message}
            for item in failures
        ],
    )
    if isinstance(result, Markup):
        response.generator = generator
        response.markup = result.content
    elif isinstance(result, NotApplicable):
        response.status = (
            "no_capable_generator"
            if result.reason is NotApplicableReason.NO_CAPABLE_GENERATOR
            else "not_applicable"
        )
        response.reason = result.reason.value
        response.detail = result.detail or None
    else:
        response.status = "failure"
        response.generator = result.generator
        response.detail = result.message
    return response


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
