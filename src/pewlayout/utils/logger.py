import os
import json
import pandas as pd
from datetime import datetime
from typing import Any, Dict, List


class ExperimentLogger:
    def __init__(self, log_dir: str, experiment_name: str):
        """
        Initializes the logger for a survey run.

        Args:
            log_dir (str): The base directory for logs.
            experiment_name (str): A unique name for the run.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.experiment_name = f"{experiment_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.experiment_name)
        self.logs: List[Dict[str, Any]] = []

        os.makedirs(self.run_dir, exist_ok=True)

    def log_record(self, index: int, data: Dict[str, Any], verbose: bool = False):
        """
        Logs a single transition record.

        Args:
            index (int): Position of the record in the run.
            data (Dict[str, Any]): Data to log for the record.
            verbose (bool): Whether to print the record to console.
        """
        log_entry = {"index": index, "timestamp": datetime.now().isoformat(), **data}

        if verbose:
            if data.get("success"):
                print(f"⚡ #{index}: {data.get('start')} → {data.get('goal')} "
                      f"in {data.get('moves')} moves via '{data.get('strategy')}'")
            else:
                print(f"❌ #{index}: {data.get('start')} → {data.get('goal')} failed")
                print(f"  🔍 Details: {data.get('error', 'Unknown error')}")

        self.logs.append(log_entry)

    def save_logs(self) -> str:
        """Saves all collected logs to a JSON file and writes a summary."""
        log_file = os.path.join(self.run_dir, "survey_log.json")
        with open(log_file, "w") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)

        print(f"📁 Logs saved to: {log_file}")
        print(f"📋 Summary saved to: {summary_file}")
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        total = len(self.logs)
        solved = len([log for log in self.logs if log.get("success")])
        invalid_paths = len([log for log in self.logs if log.get("success") and not log.get("valid_path")])

        with open(summary_file, "w") as f:
            f.write(f"Survey Summary: {self.experiment_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Transitions: {total}\n")
            f.write(f"Solved: {solved}\n")
            f.write(f"Failed: {total - solved}\n")
            f.write(f"Invalid Paths: {invalid_paths}\n")
            f.write("\nFailures:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                if not log.get("success"):
                    f.write(f"#{log.get('index', '?')}: {log.get('start')} -> {log.get('goal')}: "
                            f"{log.get('error', 'Unknown')}\n")

    def save_results(self, records: List[Dict[str, Any]], path: str, fmt: str = "csv"):
        """
        Saves survey records as a table.
        If an excel file already exists, the new records are appended.

        Args:
            records (List[Dict[str, Any]]): One dictionary per transition.
            path (str): The output file path.
            fmt (str): "csv", "json" or "excel".
        """
        results_df = pd.DataFrame(records)

        if fmt == "excel":
            if os.path.exists(path):
                try:
                    existing_df = pd.read_excel(path)
                    results_df = pd.concat([existing_df, results_df], ignore_index=True)
                except Exception as e:
                    print(f"Could not read existing excel file: {e}. Creating a new one.")
            results_df.to_excel(path, index=False)
        elif fmt == "json":
            results_df.to_json(path, orient="records", indent=2)
        else:
            results_df.to_csv(path, index=False)

        print(f"Results saved to {path}")
