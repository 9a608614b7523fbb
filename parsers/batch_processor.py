"""
Batch processing of roster PDFs in a directory.

For each <name>.pdf writes <name>_duties.json and <name>_logs.json (and
optionally <name>_duties.csv) into the output directory.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union
import json
import logging
import pandas as pd

from core.parameters import ParserConfig
from models.data_models import LogCategory, ParseResult
from parsers.roster_parser import DutyRosterParser

logger = logging.getLogger(__name__)

DUTY_COLUMNS = [
    'id', 'date', 'type', 'dutyCode', 'flightNumber', 'departureStation',
    'arrivalStation', 'departureTime', 'arrivalTime', 'annotation', 'sourceKey',
]


@dataclass
class DocumentReport:
    """Outcome of one file in a batch"""
    source: Path
    ok: bool
    duties: int = 0
    warnings: int = 0
    error: Optional[str] = None


def duties_frame(result: ParseResult) -> pd.DataFrame:
    """Duty records as a table (one row per duty)"""
    return pd.DataFrame(result.duties_as_dicts(), columns=DUTY_COLUMNS)


def write_result(result: ParseResult, output_base: Union[str, Path],
                 write_csv: bool = False) -> List[Path]:
    """Persist duties and logs next to each other under output_base"""
    output_base = Path(output_base)
    output_base.parent.mkdir(parents=True, exist_ok=True)

    duties_path = output_base.with_name(f"{output_base.name}_duties.json")
    logs_path = output_base.with_name(f"{output_base.name}_logs.json")

    duties_path.write_text(json.dumps(result.duties_as_dicts(), indent=2), encoding='utf-8')
    logs_path.write_text(json.dumps(result.logs_as_dicts(), indent=2), encoding='utf-8')
    written = [duties_path, logs_path]

    if write_csv:
        csv_path = output_base.with_name(f"{output_base.name}_duties.csv")
        duties_frame(result).to_csv(csv_path, index=False)
        written.append(csv_path)

    return written


def process_directory(dir_path: Union[str, Path], output_dir: Union[str, Path, None] = None,
                      config: ParserConfig = None, write_csv: bool = False) -> List[DocumentReport]:
    """
    Parse every *.pdf directly inside dir_path.

    A document that fails (fatally or with an unexpected extraction error) is
    reported and does not stop the batch. Logs are written for fatal failures
    too, so the reason is on disk.
    """
    dir_path = Path(dir_path)
    output_dir = Path(output_dir) if output_dir else dir_path / 'output'
    parser = DutyRosterParser(config)

    pdf_files = sorted(p for p in dir_path.iterdir()
                       if p.is_file() and p.suffix.lower() == '.pdf')
    logger.info(f"Found {len(pdf_files)} PDF files to process")

    reports = []
    for pdf_file in pdf_files:
        logger.info(f"Processing {pdf_file.name}...")
        try:
            result = parser.parse_pdf(pdf_file)
        except Exception as e:
            logger.error(f"Error processing {pdf_file.name}: {e}")
            reports.append(DocumentReport(source=pdf_file, ok=False, error=str(e)))
            continue

        write_result(result, output_dir / pdf_file.stem, write_csv=write_csv)
        reports.append(DocumentReport(
            source=pdf_file,
            ok=result.ok,
            duties=len(result.duties),
            warnings=len(result.logs_of(LogCategory.WARNING)),
            error=str(result.error) if result.error else None,
        ))
        if result.ok:
            logger.info(f"Successfully processed {pdf_file.name}")
        else:
            logger.error(f"Error processing {pdf_file.name}: {result.error}")

    return reports
