import logging
from datetime import datetime

from fastapi import FastAPI, UploadFile, File, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .errors import PairworkError, UnsupportedFile
from .models import (
    AnalysisSummary, ErrorResponse, HealthResponse, LongestPairResponse, ProjectOverlapOut,
)
from .service import PairAnalysis, analyze_csv_bytes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("pairwork.api")

app = FastAPI(
    title="pairwork",
    description="Finds the pair of employees who worked together the longest on common projects",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(PairworkError)
async def pairwork_error_handler(request: Request, exc: PairworkError):
    logger.warning("%s on %s: %s", exc.title, request.url.path, exc.message)
    body = ErrorResponse(
        error=exc.title,
        message=exc.message,
        status=exc.status_code,
        path=request.url.path,
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def to_response(analysis: PairAnalysis) -> LongestPairResponse:
    pair = analysis.pair
    intake = analysis.intake
    return LongestPairResponse(
        employee_id_low=pair.key.low,
        employee_id_high=pair.key.high,
        total_days_worked=pair.total_days_worked,
        projects=[
            ProjectOverlapOut(
                employee_id_low=entry.employee_id_low,
                employee_id_high=entry.employee_id_high,
                project_id=entry.project_id,
                days_worked=entry.days_worked,
                overlap_start=entry.overlap_start,
                overlap_end=entry.overlap_end,
            )
            for entry in pair.entries
        ],
        summary=AnalysisSummary(
            rows=analysis.stats.rows,
            records=analysis.stats.records,
            dropped_rows=len(analysis.stats.dropped_rows),
            header_skipped=analysis.stats.header_skipped,
            encoding=intake.encoding if intake else None,
            delimiter=intake.delimiter if intake else None,
        ),
        intake=intake.report if intake else {},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/pairs/longest", response_model=LongestPairResponse, responses={
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
})
def longest_pair(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".csv"):
        raise UnsupportedFile()

    logger.info("received upload %s", file.filename)
    raw = file.file.read(config.MAX_UPLOAD_BYTES + 1)
    analysis = analyze_csv_bytes(raw, max_bytes=config.MAX_UPLOAD_BYTES)
    return to_response(analysis)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
