"""FastAPI routes for CSV to JSON conversion."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile

from ...converter import CsvToJsonConverter
from ...models import ConversionResult, ConverterConfig
from ...types import Delimiter, OutputFormat
from .models import ConversionConfig, ConversionRequest, ConversionResponse, OptionsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["conversion"])


def _to_converter_config(config: ConversionConfig) -> ConverterConfig:
    try:
        return ConverterConfig.from_dict(config.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {str(e)}")


def _respond(result: ConversionResult, include_data: bool) -> ConversionResponse:
    if not result.success:
        raise HTTPException(status_code=422, detail=result.error)
    return ConversionResponse.from_result(result, include_data=include_data)


@router.get("/options", response_model=OptionsResponse)
async def get_options() -> OptionsResponse:
    """Default converter options and accepted enumeration values."""
    return OptionsResponse(
        defaults=ConversionConfig(),
        delimiters=[d.value for d in Delimiter],
        output_formats=[f.value for f in OutputFormat],
    )


@router.post("/convert", response_model=ConversionResponse)
async def convert_text(
    request: ConversionRequest,
    include_data: bool = Query(default=False, description="Also return the parsed JSON structure"),
) -> ConversionResponse:
    """Convert pasted delimited text to JSON."""
    converter = CsvToJsonConverter(_to_converter_config(request.config))
    return _respond(converter.convert(request.csv), include_data)


@router.post("/convert/file", response_model=ConversionResponse)
async def convert_upload(
    file: UploadFile = File(..., description="Delimited text file to convert"),
    config_json: str = Form(default="{}", description="Configuration as JSON string"),
    encoding: str = Form(default="utf-8", description="Text encoding of the uploaded file"),
    include_data: bool = Query(default=False, description="Also return the parsed JSON structure"),
) -> ConversionResponse:
    """Convert an uploaded file to JSON."""

    try:
        config = ConversionConfig(**json.loads(config_json))
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {str(e)}")

    content_bytes = await file.read()
    try:
        csv_content = content_bytes.decode(encoding)
    except LookupError:
        raise HTTPException(status_code=400, detail=f"Unknown encoding: {encoding}")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"File is not valid {encoding}: {str(e)}")

    logger.info("Converting upload %s (%d bytes)", file.filename, len(content_bytes))
    converter = CsvToJsonConverter(_to_converter_config(config))
    return _respond(converter.convert(csv_content), include_data)
