from pathlib import Path
from fastapi.templating import Jinja2Templates

from catalog.core.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["project_name"] = settings.PROJECT_NAME
templates.env.globals["authors_path"] = settings.authors_path
