"""Contexte de rendu injecté dans les templates à côté de la config validée."""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .schema import Padding
from .tags import ContentPage


class RenderContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_id: str = ""
    padding: Padding = Padding()
    pages: Tuple[ContentPage, ...] = ()
