"""The three HTML pages the service renders, from ``stegvault/templates``."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from stegvault.models import FailureEnvelope

_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@lru_cache()
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def upload_page() -> str:
    return _get_env().get_template("upload.html").render()


def view_page(key: str) -> str:
    return _get_env().get_template("view.html").render(key=key)


def error_page(envelope: FailureEnvelope) -> str:
    return _get_env().get_template("error.html").render(envelope=envelope)
