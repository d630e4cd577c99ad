"""Plugin exposing image recompression through the registry."""

from __future__ import annotations

from ...compress.recompressor import CompressionResult, RecompressionSettings, recompress_pdf
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.compress")


def _settings_from_config(config: dict) -> RecompressionSettings:
    settings = config.get("settings")
    if isinstance(settings, RecompressionSettings):
        return settings
    defaults = RecompressionSettings()
    quality = config.get("quality")
    scale = config.get("scale")
    return RecompressionSettings(
        quality=defaults.quality if quality is None else quality,
        scale=defaults.scale if scale is None else scale,
    )


@register_tool("compress")
class CompressTool(BaseTool):
    name = "compress"

    def run(self) -> CompressionResult:
        settings = _settings_from_config(self.context.config)
        LOGGER.debug(
            "Recompressing images in %s (quality=%d, scale=%.2f)",
            self.context.input_path,
            settings.quality,
            settings.scale,
        )
        result = recompress_pdf(
            self.require_input(),
            self.require_output(),
            settings,
            codec=self.context.config.get("codec"),
        )
        self.context.resources["result"] = result
        return result
