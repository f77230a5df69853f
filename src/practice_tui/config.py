from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

# --- Configuration ---
CONFIG_PATH = os.path.expanduser("~/.config/practice/config.json")
PROGRESS_FILE = os.path.expanduser("~/.config/practice/progress.json")
EXPORT_FILE = os.path.expanduser("~/practice-progress.json")
CACHE_DIR = os.path.expanduser("~/.cache/practice")
CACHE_TTL = 3600
BUNDLED_DATA_DIR = Path(__file__).parent / "data"

HTTP_TIMEOUT = 15
REQUEST_HEADERS = {"User-Agent": "practice-tui/0.1"}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]s[/] status  [b {color}]b[/] bookmark  "
        "[b {color}]g[/] search all  [b {color}]ctrl+l[/] datasets"
    ),
}

# Built-in datasets, in load order.
DATASET_LABELS = {
    "c-programming": "C Programming",
    "zoho-dsa": "Zoho DSA",
    "lld": "Low Level Design",
    "zoho-docs": "Zoho-Docs Questions",
    "logical-coding": "Logical Coding",
}
DATASET_FILES = {
    "c-programming": "c-questions.json",
    "zoho-dsa": "dsa-questions.json",
    "lld": "lld-questions.json",
    "zoho-docs": "zoho-docs.json",
    "logical-coding": "logical-questions.json",
}
DATASET_TOTALS = {
    "c-programming": 22,
    "zoho-dsa": 50,
    "lld": 18,
    "zoho-docs": 106,
    "logical-coding": 25,
}

# --- Logging ---
logger = logging.getLogger("practice")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/practice_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


# --- Dataset registry ---
@dataclass(frozen=True)
class DatasetInfo:
    id: str
    label: str
    data_file: str
    total: int


class DatasetCatalog:
    """
    Ordered registry of the known datasets.

    Built from three mappings keyed by dataset id. Every mapping must cover
    exactly the same ids, so a dataset can never be missing its label, its
    data file or its question total.
    """

    def __init__(
        self,
        labels: Mapping[str, str],
        data_files: Mapping[str, str],
        totals: Mapping[str, int],
    ):
        ids = list(labels)
        expected = set(ids)
        for name, mapping in (("data files", data_files), ("totals", totals)):
            keys = set(mapping)
            if keys != expected:
                missing = sorted(expected - keys)
                extra = sorted(keys - expected)
                raise ValueError(
                    f"Dataset {name} do not match labels "
                    f"(missing: {missing}, unexpected: {extra})"
                )
        for dataset_id, total in totals.items():
            if isinstance(total, bool) or not isinstance(total, int) or total < 0:
                raise ValueError(f"Invalid total for dataset {dataset_id!r}: {total!r}")

        self._datasets: Dict[str, DatasetInfo] = {
            dataset_id: DatasetInfo(
                id=dataset_id,
                label=labels[dataset_id],
                data_file=data_files[dataset_id],
                total=totals[dataset_id],
            )
            for dataset_id in ids
        }

    def __iter__(self) -> Iterator[DatasetInfo]:
        return iter(self._datasets.values())

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets

    @property
    def ids(self) -> List[str]:
        return list(self._datasets)

    def get(self, dataset_id: str) -> Optional[DatasetInfo]:
        return self._datasets.get(dataset_id)

    def label(self, dataset_id: str) -> str:
        info = self._datasets.get(dataset_id)
        return info.label if info else dataset_id

    def total(self, dataset_id: str) -> int:
        info = self._datasets.get(dataset_id)
        return info.total if info else 0


def build_catalog(config: Optional[Dict[str, Any]] = None) -> DatasetCatalog:
    """
    Build the dataset catalog from the built-in datasets, applying any
    overrides or additions found under the ``datasets`` config key.
    """
    labels = dict(DATASET_LABELS)
    data_files = dict(DATASET_FILES)
    totals = dict(DATASET_TOTALS)

    for dataset_id, overrides in (config or {}).get("datasets", {}).items():
        if "label" in overrides:
            labels[dataset_id] = overrides["label"]
        if "file" in overrides:
            data_files[dataset_id] = overrides["file"]
        if "total" in overrides:
            totals[dataset_id] = overrides["total"]

    return DatasetCatalog(labels, data_files, totals)


# --- Config file ---
def load_config() -> Dict[str, Any]:
    """Load the main configuration file."""
    if not os.path.exists(CONFIG_PATH):
        logger.info("Config file not found at %s, using defaults.", CONFIG_PATH)
        return {}
    try:
        with open(CONFIG_PATH, "r") as f:
            config = json.load(f)
            logger.info("Loaded config from %s", CONFIG_PATH)
            return config
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return {}


def save_config(config: Dict[str, Any]) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
        with open(CONFIG_PATH, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", CONFIG_PATH)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", CONFIG_PATH, e)
