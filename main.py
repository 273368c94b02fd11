import zipfile
import logging
from io import BytesIO
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from column_mapping import REQUIRED_COLUMNS, apply_column_mapping, map_columns
from config import configure_logging, load_settings
from documents import DOCX_MEDIA_TYPE, XLSX_MEDIA_TYPE, generate_fs_document, generate_fs_workbook, read_urs_file
from fs_generator import FSGenerator

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title="URS to FS Generator")


class ColumnMappingRequest(BaseModel):
    columns: List[str]
    overrides: Optional[Dict[str, str]] = None


class TransformRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    include_analysis: bool = Field(default=False)
    map_columns: bool = Field(default=False, description="Reconcile arbitrary headers before transforming")


def get_generator() -> FSGenerator:
    return FSGenerator.from_settings(settings)


async def read_upload(file: UploadFile) -> List[Dict[str, Any]]:
    content = await file.read()
    return read_urs_file(content, filename=file.filename or '')


def mapped_rows(raw_rows: List[Dict[str, Any]]):
    mapping = map_columns(raw_rows[0].keys() if raw_rows else [])
    return mapping, apply_column_mapping(raw_rows, mapping)


@app.get("/")
async def root():
    return {
        "service": "URS to FS Generator",
        "required_columns": REQUIRED_COLUMNS,
        "endpoints": ["/map_columns", "/transform", "/upload-urs/", "/generate-documents"]
    }


@app.post("/map_columns")
async def map_columns_endpoint(request: ColumnMappingRequest):
    """Match sheet headers to the URS columns"""
    return map_columns(request.columns, request.overrides).to_dict()


@app.post("/transform")
async def transform(request: TransformRequest):
    """Transform URS rows posted as JSON into FS rows"""
    try:
        rows = request.records
        mapping = None
        if request.map_columns and rows:
            mapping, rows = mapped_rows(rows)

        outcomes = get_generator().transform(rows)
        response = {
            "success": True,
            "count": len(outcomes),
            "fs_records": [outcome.to_dict(include_analysis=request.include_analysis) for outcome in outcomes]
        }
        if mapping is not None:
            response["mapping"] = mapping.to_dict()
        return response
    except Exception as e:
        logger.error(f"Transformation error: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/upload-urs/")
async def upload_urs(file: UploadFile = File(...), include_analysis: bool = False):
    """Read an uploaded URS sheet and return the generated FS rows"""
    try:
        mapping, rows = mapped_rows(await read_upload(file))
        outcomes = get_generator().transform(rows)

        return {
            "success": True,
            "filename": file.filename,
            "mapping": mapping.to_dict(),
            "count": len(outcomes),
            "fs_records": [outcome.to_dict(include_analysis=include_analysis) for outcome in outcomes]
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing upload {file.filename}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/generate-documents")
async def generate_documents(file: UploadFile = File(...),
                             format: str = Query(default="excel", pattern="^(excel|word|both)$")):
    """Generate the FS as an Excel workbook, a Word document, or both zipped"""
    try:
        _, rows = mapped_rows(await read_upload(file))
        fs_rows = [record.to_row() for record in get_generator().generate(rows)]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating FS from {file.filename}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to generate documents: {str(e)}")

    try:
        if format == 'excel':
            return StreamingResponse(
                generate_fs_workbook(fs_rows),
                media_type=XLSX_MEDIA_TYPE,
                headers={
                    "Content-Disposition": "attachment; filename=functional_specification.xlsx"
                }
            )

        if format == 'word':
            return StreamingResponse(
                generate_fs_document(fs_rows),
                media_type=DOCX_MEDIA_TYPE,
                headers={
                    "Content-Disposition": "attachment; filename=functional_specification.docx"
                }
            )

        zip_io = BytesIO()
        with zipfile.ZipFile(zip_io, mode='w', compression=zipfile.ZIP_DEFLATED) as zip_file:
            zip_file.writestr('functional_specification.xlsx', generate_fs_workbook(fs_rows).getvalue())
            zip_file.writestr('functional_specification.docx', generate_fs_document(fs_rows).getvalue())

        zip_io.seek(0)
        return StreamingResponse(
            zip_io,
            media_type="application/zip",
            headers={
                "Content-Disposition": "attachment; filename=functional_specification.zip"
            }
        )
    except Exception as e:
        logger.error(f"Document generation error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to generate documents: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
