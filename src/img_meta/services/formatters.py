import json
import shlex
from functools import lru_cache
from importlib import resources
from typing import Dict, Sequence

from img_meta.models.imagemeta import AggregateReport, ImageMetadata
from img_meta.schemas.enum import OutputFormat
from img_meta.schemas.imagemeta import ImageMetaResponse

TYPES_TEMPLATE = "image_meta.d.ts"
TYPES_START_MARKER = "// !START OF TYPES THAT ARE PASTED VERBATIM INTO THE GENERATED TYPESCRIPT!"
TYPES_END_MARKER = "// !END OF TYPES THAT ARE PASTED VERBATIM INTO THE GENERATED TYPESCRIPT!"
SRC_TYPE_NAME = "ImageMetaProcessedSrc"


def _to_image_meta_response(meta: ImageMetadata) -> dict:
    """Internal record -> serializable dict. Absent optionals are dropped, not nulled."""
    return ImageMetaResponse(
        width=meta.width,
        height=meta.height,
        captured_at=meta.captured_at,
        map_link=meta.map_link,
    ).model_dump(by_alias=True, exclude_none=True)


def _to_serializable(report: AggregateReport) -> Dict[str, dict]:
    return {path: _to_image_meta_response(meta) for path, meta in report.items()}


@lru_cache(maxsize=1)
def load_types_template() -> str:
    """The ImageMeta declaration block from the bundled template, markers excluded."""
    text = resources.files("img_meta").joinpath("templates").joinpath(TYPES_TEMPLATE).read_text(encoding="utf-8")
    start = text.index(TYPES_START_MARKER) + len(TYPES_START_MARKER)
    end = text.index(TYPES_END_MARKER)
    return text[start:end].strip("\n")


def format_data(report: AggregateReport) -> str:
    return json.dumps(_to_serializable(report), indent=2, ensure_ascii=False) + "\n"


def format_source(report: AggregateReport, invocation: Sequence[str] = ()) -> str:
    command = shlex.join(invocation).replace("\n", "\\n") if invocation else "img-meta"
    header = "\n".join(
        [
            "// This file is generated by img-meta. DO NOT EDIT.",
            "// Regenerate it by running:",
            f"//   {command}",
        ]
    )

    images = json.dumps(_to_serializable(report), indent=2, ensure_ascii=False)
    images_block = f"export const images: Record<{SRC_TYPE_NAME}, ImageMeta> = {images};"

    src_union = " | ".join(json.dumps(path, ensure_ascii=False) for path in report) or "never"
    src_block = f"export type {SRC_TYPE_NAME} = {src_union};"

    return "\n\n".join([header, images_block, load_types_template(), src_block]) + "\n"


def format_report(report: AggregateReport, mode: OutputFormat, invocation: Sequence[str] = ()) -> str:
    """
    Serializes the report.

    Args:
        report: path -> metadata, already in output order.
        mode: DATA for a JSON document, SOURCE for a TypeScript module.
        invocation: command line quoted in the SOURCE header.
    """
    mode = OutputFormat(mode)
    if mode == OutputFormat.SOURCE:
        return format_source(report, invocation)
    return format_data(report)
