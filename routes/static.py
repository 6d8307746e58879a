from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from config import get_config_value

router = APIRouter()

INDEX_FILE = "index.html"


def resolve_public_file(public_dir: Path, request_path: str) -> Path:
    """Map a URL path onto public_dir, with index.html fallback for client-side routes."""
    public_dir = public_dir.resolve()
    relative = request_path.lstrip("/") or INDEX_FILE
    candidate = (public_dir / relative).resolve()
    if public_dir != candidate and public_dir not in candidate.parents:
        raise HTTPException(status_code=403, detail="Forbidden")
    if candidate.is_file():
        return candidate
    if not Path(relative).suffix:
        index = public_dir / INDEX_FILE
        if index.is_file():
            return index
    raise HTTPException(status_code=404, detail="Not found")


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_static(full_path: str):
    if full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")
    public_dir = Path(get_config_value("paths", "public_dir"))
    return FileResponse(resolve_public_file(public_dir, full_path))
