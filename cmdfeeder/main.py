#!/usr/bin/env python3
"""
cmdfeeder - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
The transport that drives a device subscribes to a session's feeder; the
HTTP surface only feeds, pauses and steps it.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from cmdfeeder.logging_config import configure_logging, get_logging_config
from cmdfeeder.modules.api import (
    ChangedResponse,
    CreateSessionRequest,
    FeedRequest,
    HoldRequest,
    NextResponse,
    SentCommand,
    SessionResponse,
)

# Import modules through their black box interfaces
from cmdfeeder.modules.config import get_config
from cmdfeeder.modules.feeder import Feeder, FeederEvent, FeederSnapshot
from cmdfeeder.modules.session import SessionModule

# Get configuration
config = get_config()

configure_logging(config.get("log_level"))
logger = logging.getLogger(__name__)

# Module instances (initialized at startup)
session_module: Optional[SessionModule] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global session_module

    # Startup
    logger.info("Starting cmdfeeder API...")
    session_module = SessionModule(
        max_sent_history=config.get("max_sent_history"),
        strip_comments=config.get("strip_comments"),
    )
    logger.info("cmdfeeder API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down cmdfeeder API...")
    for session in session_module.get_active_sessions():
        session_module.end_session(session["session_id"])
    logger.info("cmdfeeder API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="cmdfeeder API",
    description="cmdfeeder - Buffered command delivery with hold/resume",
    version="1.0.0",
    lifespan=lifespan,
)


def get_session_module() -> SessionModule:
    if not session_module:
        raise HTTPException(503, "Service not initialized")
    return session_module


def get_feeder_or_404(session_id: str) -> Feeder:
    feeder = get_session_module().get_feeder(session_id)
    if feeder is None:
        raise HTTPException(404, f"Session {session_id} not found")
    return feeder


# Session Endpoints


@app.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(request: CreateSessionRequest):
    """
    Create a new feeder session.

    Returns:
        201: Session created
    """
    sessions = get_session_module()
    session_id = sessions.create_session(port=request.port, strip_comments=request.strip_comments)
    return SessionResponse(**sessions.get_session(session_id))


@app.get("/sessions", response_model=List[SessionResponse])
async def list_sessions():
    return [SessionResponse(**session) for session in get_session_module().get_active_sessions()]


@app.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    session = get_session_module().get_session(session_id)
    if not session:
        raise HTTPException(404, f"Session {session_id} not found")
    return SessionResponse(**session)


@app.delete("/sessions/{session_id}", status_code=204)
async def end_session(session_id: str):
    if not get_session_module().end_session(session_id):
        raise HTTPException(404, f"Session {session_id} not found")
    return Response(status_code=204)


# Feeder Endpoints


@app.post("/sessions/{session_id}/feed", response_model=FeederSnapshot)
async def feed(session_id: str, request: FeedRequest):
    """
    Buffer commands for the session.

    A multi-line string is split into one command per line.
    """
    feeder = get_feeder_or_404(session_id)
    feeder.feed(request.data, request.context, {"direction": request.direction.value})
    return feeder.snapshot()


@app.post("/sessions/{session_id}/hold", response_model=FeederSnapshot)
async def hold(session_id: str, request: HoldRequest):
    feeder = get_feeder_or_404(session_id)
    feeder.hold(request.reason)
    return feeder.snapshot()


@app.post("/sessions/{session_id}/unhold", response_model=FeederSnapshot)
async def unhold(session_id: str):
    feeder = get_feeder_or_404(session_id)
    feeder.unhold()
    return feeder.snapshot()


@app.post("/sessions/{session_id}/next", response_model=NextResponse)
async def next_command(session_id: str):
    """
    Release at most one command.

    Returns:
        200: {"pending": bool, "sent": command or null}
        500: The data filter or a "data" listener raised; the command
             being released is not requeued
    """
    feeder = get_feeder_or_404(session_id)

    released = []
    unsubscribe = feeder.subscribe(
        FeederEvent.DATA, lambda command, context: released.append(command)
    )
    try:
        pending = feeder.next()
    except Exception as e:
        logger.exception(f"Drain step failed for session {session_id}")
        return JSONResponse(status_code=500, content={"error": f"Drain step failed: {e}"})
    finally:
        unsubscribe()

    return NextResponse(pending=pending, sent=released[0] if released else None)


@app.post("/sessions/{session_id}/clear", response_model=FeederSnapshot)
async def clear(session_id: str):
    feeder = get_feeder_or_404(session_id)
    feeder.clear()
    return feeder.snapshot()


@app.post("/sessions/{session_id}/reset", response_model=FeederSnapshot)
async def reset(session_id: str):
    feeder = get_feeder_or_404(session_id)
    feeder.reset()
    return feeder.snapshot()


@app.get("/sessions/{session_id}/status", response_model=FeederSnapshot)
async def status(session_id: str):
    """Feeder snapshot. Does not consume the changed flag."""
    return get_feeder_or_404(session_id).snapshot()


@app.get("/sessions/{session_id}/changed", response_model=ChangedResponse)
async def changed(session_id: str):
    """Report and reset the changed flag, for polling clients."""
    return ChangedResponse(changed=get_feeder_or_404(session_id).peek())


@app.get("/sessions/{session_id}/sent", response_model=List[SentCommand])
async def sent(session_id: str, limit: Optional[int] = Query(None, ge=0, le=1000)):
    history = get_session_module().get_sent(session_id, limit=limit)
    if history is None:
        raise HTTPException(404, f"Session {session_id} not found")
    return history


# Health Check


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        200: Healthy
        503: Not initialized
    """
    if not session_module:
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {
        "status": "healthy",
        "version": "1.0.0",
        "active_sessions": len(session_module.get_active_sessions()),
    }


# Error handlers


@app.exception_handler(ValueError)
async def validation_error_handler(request, exc):
    """Handle validation errors."""
    logger.error(f"Validation error: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


if __name__ == "__main__":
    # Use dict config for logging, not file path
    uvicorn.run(
        "cmdfeeder.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )
