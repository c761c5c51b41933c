"""
Shell del SPA (React): sirve `index.html` del build para las rutas de cliente.

La navegación la resuelve react-router en el navegador; aquí solo se enumeran
las rutas para que un refresh en `/dash/notes` no termine en 404.
"""
from typing import Any, Dict, List, Tuple
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from app.core.config import settings

# Árbol de vistas: Layout -> Public | Login | DashLayout -> Welcome | NotesList | UsersList
VIEW_TREE: Dict[str, Any] = {
    "path": "/",
    "view": "Layout",
    "index": "Public",
    "children": [
        {"path": "login", "view": "Login"},
        {
            "path": "dash",
            "view": "DashLayout",
            "index": "Welcome",
            "children": [
                {"path": "notes", "index": "NotesList"},
                {"path": "users", "index": "UsersList"},
            ],
        },
    ],
}


def flatten_routes(node: Dict[str, Any], base: str = "") -> List[Tuple[str, str]]:
    """Devuelve (path absoluto, vista) para cada ruta navegable del árbol."""
    path = node["path"]
    full = path if path.startswith("/") else f"{base.rstrip('/')}/{path}"
    out: List[Tuple[str, str]] = []
    if "index" in node:
        out.append((full, node["index"]))
    elif "view" in node:
        out.append((full, node["view"]))
    for child in node.get("children", []):
        out.extend(flatten_routes(child, full))
    return out


CLIENT_ROUTES = flatten_routes(VIEW_TREE)

router = APIRouter(tags=["Frontend"], include_in_schema=False)


async def spa_index() -> FileResponse:
    index = settings.frontend_index
    if index is None or not index.is_file():
        raise HTTPException(status_code=404, detail="Frontend build not found")
    return FileResponse(index)


for _path, _view in CLIENT_ROUTES:
    router.add_api_route(_path, spa_index, methods=["GET"], name=f"spa_{_view}")
