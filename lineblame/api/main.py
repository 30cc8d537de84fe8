from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import asyncio
import os
from typing import Any, Dict, List, Optional

from lineblame.config import BlameConfig
from lineblame.editor import TextEditor
from lineblame.extension import BlameExtension, activate
from lineblame.git.blame.urls import default_web_path

# --- CONFIGURATION ---
CONFIG_FILE = os.getenv("GITBLAME_CONFIG_FILE")

app = FastAPI(
    title="Line Blame Engine",
    description="Attributes the focused editor line to the commit that last changed it",
    version="1.0.0"
)

# Editor plugins call in from a webview / local process
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- STATE ---
# One extension per process, built on startup and released on shutdown
state: Dict[str, Optional[BlameExtension]] = {
    "extension": None
}
startup_error = None


def load_config() -> BlameConfig:
    config = BlameConfig.from_env()
    if CONFIG_FILE:
        config = BlameConfig.from_yaml(CONFIG_FILE, base=config)
    return config


def get_extension() -> BlameExtension:
    extension = state["extension"]
    if extension is None or not extension.active:
        raise HTTPException(status_code=503, detail="Blame engine is not running")
    return extension


async def _settle(pending: List[asyncio.Future]) -> List[Any]:
    if not pending:
        return []
    return await asyncio.gather(*pending)


def _status_payload(extension: BlameExtension, applied: List[Any]) -> Dict[str, Any]:
    return {
        "applied": any(applied),
        "editor": extension.editor.active_editor.to_dict() if extension.editor.active_editor else None,
        "status": extension.status_bar.to_dict()
    }


class EditorRequest(BaseModel):
    file_name: str
    line: int = 0
    scheme: str = "file"
    is_untitled: bool = False


class SelectionRequest(BaseModel):
    line: int


class DocumentRequest(BaseModel):
    file_name: str


class ConfigRequest(BaseModel):
    commit_url: Optional[str] = None
    info_message_format: Optional[str] = None
    status_bar_message_format: Optional[str] = None
    internal_hash_length: Optional[int] = None
    ignore_whitespace: Optional[bool] = None


@app.on_event("startup")
async def start_engine():
    """Build the blame engine from environment / config file"""
    global startup_error
    try:
        state["extension"] = activate(config=load_config())
        startup_error = None
        print("[Startup] Blame engine ready")
    except Exception as e:
        startup_error = str(e)
        print(f"[Startup] Failed to start blame engine: {e}")


@app.on_event("shutdown")
async def stop_engine():
    extension = state["extension"]
    if extension is not None:
        extension.deactivate()
    state["extension"] = None


# --- CORE ENDPOINTS ---

@app.get("/")
def health_check():
    extension = state["extension"]
    return {
        "status": "active" if extension is not None and extension.active else "inactive",
        "system": "Line Blame",
        "startup_error": startup_error
    }


@app.get("/status")
def get_status():
    """Current status bar text for the focused line"""
    return get_extension().status_bar.to_dict()


# --- EDITOR EVENTS ---

@app.post("/editor/active")
async def set_active_editor(request: Optional[EditorRequest] = None):
    """
    Report the focused editor (or none).

    Resolves the focused line and returns the status bar afterwards.
    ``applied`` is false when the editor moved again before the
    resolution finished.
    """
    extension = get_extension()

    if request is not None and request.line < 0:
        raise HTTPException(status_code=400, detail="line must be >= 0")

    extension.editor.set_active(
        TextEditor(
            file_name=os.path.abspath(request.file_name),
            line=request.line,
            scheme=request.scheme,
            is_untitled=request.is_untitled
        ) if request is not None else None
    )

    applied = await _settle(extension.events.active_editor_changed.fire(extension.editor.active_editor))
    return _status_payload(extension, applied)


@app.post("/editor/selection")
async def move_selection(request: SelectionRequest):
    """Report a cursor move in the focused editor"""
    extension = get_extension()

    if request.line < 0:
        raise HTTPException(status_code=400, detail="line must be >= 0")

    try:
        extension.editor.move(request.line)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    applied = await _settle(extension.events.selection_changed.fire(request.line))
    return _status_payload(extension, applied)


@app.post("/editor/save")
async def save_document(request: DocumentRequest):
    """Report a save; the file's blame is refetched"""
    extension = get_extension()
    file_name = os.path.abspath(request.file_name)

    await _settle(extension.events.file_changed.fire(file_name))
    applied = await _settle(extension.events.document_saved.fire(file_name))
    return _status_payload(extension, applied)


@app.post("/editor/file-changed")
async def file_changed(request: DocumentRequest):
    """Report an on-disk change made outside the editor (checkout, rebase, ...)"""
    extension = get_extension()
    file_name = os.path.abspath(request.file_name)

    await _settle(extension.events.file_changed.fire(file_name))
    return {"file_name": file_name, "cached": file_name in extension.cache}


@app.post("/editor/close")
async def close_document(request: DocumentRequest):
    """Report a closed or deleted document; its cache entry is released"""
    extension = get_extension()
    file_name = os.path.abspath(request.file_name)

    await _settle(extension.events.document_closed.fire(file_name))
    return {"file_name": file_name, "cached": file_name in extension.cache}


# --- BLAME ENDPOINTS ---

@app.get("/blame/line")
async def blame_line(
    file_name: str = Query(..., description="Path to the file"),
    line: int = Query(..., ge=0, description="0-based line number")
):
    """Commit that last changed a line, without touching the status bar"""
    extension = get_extension()
    commit = await extension.orchestrator.line_resolver.resolve(os.path.abspath(file_name), line)
    return commit.to_dict()


@app.get("/blame/cache")
def cache_statistics():
    return get_extension().cache.get_statistics()


# --- COMMANDS ---

@app.post("/commands/show-message")
async def show_message():
    """Info message for the focused line, with a "View" action when a commit URL is configured"""
    extension = get_extension()
    await extension.orchestrator.show_message()
    return extension.presenter.drain()


@app.post("/commands/blame-link")
async def blame_link():
    """Commit URL for the focused line"""
    extension = get_extension()
    url = await extension.orchestrator.blame_link()
    return {"url": url, **extension.presenter.drain()}


@app.get("/url/default-web-path")
def get_default_web_path(
    remote: str = Query(..., description="Remote URL, e.g. git@github.com:user/repo.git"),
    hash: str = Query(..., description="Commit hash")
):
    return {"url": default_web_path(remote, hash)}


# --- CONFIGURATION ---

@app.get("/config")
def get_config():
    return get_extension().properties.config.to_dict()


@app.put("/config")
def update_config(request: ConfigRequest):
    extension = get_extension()
    # Fields sent as null are kept so commit_url can be cleared
    values = request.model_dump(exclude_unset=True)

    try:
        config = extension.properties.update(**values)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return config.to_dict()


@app.get("/output")
def get_output():
    """Diagnostics written by the blame engine"""
    return {"lines": get_extension().error_handler.lines}
