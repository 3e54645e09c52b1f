"""
On-demand loading of the map and chart libraries.

folium and plotly are heavy imports that only the HTML view needs. Each is
imported once, off the event loop, the first time a view asks for it;
concurrent views share the same in-flight import.
"""

import asyncio
import importlib
from types import ModuleType

from app.shared.resources import LazyResource


async def import_module(name: str) -> ModuleType:
    return await asyncio.to_thread(importlib.import_module, name)


class LibraryRegistry:
    """Process-wide cache of the rendering libraries."""

    def __init__(self):
        self.folium: LazyResource[ModuleType] = LazyResource(
            "folium", lambda: import_module("folium")
        )
        self.plotly: LazyResource[ModuleType] = LazyResource(
            "plotly", lambda: import_module("plotly.graph_objects")
        )

    async def map_library(self) -> ModuleType:
        return await self.folium.get()

    async def chart_library(self) -> ModuleType:
        return await self.plotly.get()
