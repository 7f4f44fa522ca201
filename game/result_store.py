"""
Result Store - keeps finished session outcomes as JSON files
"""

import json
import logging
from pathlib import Path
from datetime import datetime

from utils.constants import RESULTS_DIR

logger = logging.getLogger(__name__)

STORE_VERSION = '1.0.0'


class ResultStore:
    """
    Stores and lists session outcomes
    """
    def __init__(self, results_dir=RESULTS_DIR):
        """
        Args:
            results_dir: Directory to store result files
        """
        self.results_dir = Path(results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.last_saved = None

    def save_result(self, outcome, slot_name=None):
        """
        Save a session outcome

        Args:
            outcome: Outcome dict (SessionOutcome.to_dict())
            slot_name: File name without extension; timestamp-based when omitted

        Returns:
            bool: True if save successful
        """
        now = datetime.now()
        slot_name = slot_name or now.strftime("%Y%m%d-%H%M%S-%f")

        try:
            record = dict(outcome)

            # Add metadata
            record['metadata'] = {
                'slot_name': slot_name,
                'timestamp': now.isoformat(),
                'version': STORE_VERSION
            }

            save_path = self.results_dir / f"{slot_name}.json"
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(record, f, indent=2)

            self.last_saved = slot_name
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.warning("Saving result failed: %s", e)
            return False

    __call__ = save_result

    def load_result(self, slot_name):
        """
        Load one stored outcome

        Returns:
            dict: Outcome record or None if it cannot be read
        """
        save_path = self.results_dir / f"{slot_name}.json"

        if not save_path.exists():
            logger.info("Result file not found: %s", save_path)
            return None

        try:
            with open(save_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Loading result failed: %s", e)
            return None

    def list_results(self, difficulty=None):
        """
        Stored outcomes, newest first

        Args:
            difficulty: Only results for this difficulty key

        Returns:
            list: Outcome records (unreadable files are skipped)
        """
        results = []

        for result_file in self.results_dir.glob("*.json"):
            try:
                with open(result_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.debug("Skipping unreadable result %s: %s", result_file, e)
                continue

            if not isinstance(data, dict):
                continue
            if difficulty is not None and data.get('difficulty') != difficulty:
                continue
            results.append(data)

        results.sort(key=lambda r: r.get('metadata', {}).get('timestamp', ''), reverse=True)
        return results

    def best_score(self, difficulty=None):
        """Highest stored score, 0 if nothing stored"""
        return max((r.get('score', 0) for r in self.list_results(difficulty)), default=0)

    def delete_result(self, slot_name):
        """
        Delete a result file

        Returns:
            bool: True if deleted successfully
        """
        save_path = self.results_dir / f"{slot_name}.json"
        try:
            if save_path.exists():
                save_path.unlink()
                return True
            return False
        except OSError as e:
            logger.warning("Deleting result failed: %s", e)
            return False

    def __repr__(self):
        return f"ResultStore(dir={str(self.results_dir)!r})"
