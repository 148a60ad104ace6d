"""
Results reporting utilities for modelSelector.

This module writes result tables to CSV and renders an HTML summary report.
"""

from typing import Any, Dict, Optional, Union
import pandas as pd
import numpy as np
from pathlib import Path
import json
from datetime import datetime

from ..utils.logger import get_logger


class ResultsReporter:
    """Reporter for modelSelector results."""

    def __init__(self):
        self.logger = get_logger("ResultsReporter")

    def save_tables(self,
                    tables: Dict[str, pd.DataFrame],
                    output_dir: Union[str, Path]) -> Dict[str, Path]:
        """Write each table to ``<output_dir>/<name>.csv``."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = {}
        for name, table in tables.items():
            path = output_dir / f"{name}.csv"
            keep_index = table.index.name is not None
            table.to_csv(path, index=keep_index)
            paths[name] = path
            self.logger.info(f"Saved {name} table: {path}")
        return paths

    def generate_report(self,
                        results: Dict[str, Any],
                        output_path: Union[str, Path]) -> None:
        """
        Generate an HTML report.

        ``results`` keys used: ``title``, ``summary`` (dict), ``sections``
        (mapping of heading -> DataFrame) and ``notes`` (list of strings).
        """
        self.logger.info(f"Generating report to {output_path}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html_content = self._generate_html_report(results)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)

        self.logger.info(f"Report generated successfully: {output_path}")

    def _generate_html_report(self, results: Dict[str, Any]) -> str:
        """Generate HTML report content."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        title = results.get('title', 'modelSelector Results Report')

        sections = "".join(
            f'<div class="section"><h2>{heading}</h2>{self._table_html(table)}</div>'
            for heading, table in results.get('sections', {}).items()
        )
        notes = "".join(f'<p class="note">{note}</p>' for note in results.get('notes', []))

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>{title}</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 40px; }}
                .header {{ background-color: #f0f0f0; padding: 20px; border-radius: 5px; }}
                .section {{ margin: 20px 0; }}
                .metric {{ display: inline-block; margin: 10px; padding: 10px;
                         background-color: #e8f4f8; border-radius: 3px; }}
                .note {{ background-color: #fff3cd; padding: 10px; border-radius: 3px; }}
                table {{ border-collapse: collapse; width: 100%; }}
                th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
                th {{ background-color: #f2f2f2; }}
            </style>
        </head>
        <body>
            <div class="header">
                <h1>{title}</h1>
                <p>Generated on: {timestamp}</p>
            </div>

            <div class="section">
                <h2>Summary</h2>
                {self._generate_summary_section(results.get('summary', {}))}
            </div>
            {notes}
            {sections}
        </body>
        </html>
        """

    def _generate_summary_section(self, summary: Dict[str, Any]) -> str:
        """Generate summary section HTML."""
        return "".join(
            f'<div class="metric"><strong>{key}:</strong> {self._format_value(value)}</div>'
            for key, value in summary.items()
        )

    def _table_html(self, table: Optional[pd.DataFrame]) -> str:
        if table is None or table.empty:
            return "<p>No results available.</p>"
        return table.to_html(float_format=lambda v: f"{v:.4f}", border=0)

    def _format_value(self, value: Any) -> str:
        if isinstance(value, (float, np.floating)):
            return f"{value:.4f}"
        return str(value)

    def save_results_json(self,
                          results: Dict[str, Any],
                          output_path: Union[str, Path]) -> None:
        """Save results as JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        results_serializable = self._make_json_serializable(results)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(results_serializable, f, indent=2)

        self.logger.info(f"Results saved as JSON: {output_path}")

    def _make_json_serializable(self, obj: Any) -> Any:
        """Convert numpy and pandas objects to JSON-serializable values."""
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, (np.integer,)):
            return int(obj)
        elif isinstance(obj, (np.floating,)):
            return float(obj)
        elif isinstance(obj, (np.bool_,)):
            return bool(obj)
        elif isinstance(obj, pd.DataFrame):
            return self._make_json_serializable(obj.reset_index().to_dict(orient='records'))
        elif isinstance(obj, dict):
            return {str(key): self._make_json_serializable(value) for key, value in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_json_serializable(item) for item in obj]
        else:
            return obj
