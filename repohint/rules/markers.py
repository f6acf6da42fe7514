"""
Durable suppression markers.

Records which pull requests (and labels) a rule has already commented on, so
that rules flagged ``comment_once`` do not repeat themselves across checks.
Each rule owns an append-only text file with one marker per line, either a
bare PR number or ``<pr number>:<label>``. Files are never compacted or pruned.
"""

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

MARKER_DIR_NAME = "tmp"
MARKER_FILE_SUFFIX = "-checked"


def marker_lines(pr_number: str | int, labels: str | list[str] | None) -> list[str]:
    """Marker lines a rule outcome must find to count as already checked."""
    if not labels:
        return [str(pr_number)]
    if isinstance(labels, str):
        return [f"{pr_number}:{labels}"]
    return list(dict.fromkeys(f"{pr_number}:{label}" for label in labels))


class SuppressionMarkerStore:
    """Marker files kept under ``<temp_dir>/tmp``."""

    def __init__(self, temp_dir: str | Path):
        self.directory = Path(temp_dir) / MARKER_DIR_NAME

    def marker_file(self, rule_name: str) -> Path:
        return self.directory / f"{rule_name}{MARKER_FILE_SUFFIX}"

    def is_available(self) -> bool:
        """Create the marker directory if needed; False when it cannot be used."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except FileExistsError:
            logger.error("Unable to save checked logs, marker path is not a directory", path=str(self.directory))
            return False
        except OSError as e:
            logger.error("Unable to create marker directory", path=str(self.directory), error=str(e))
            return False
        return True

    def recorded(self, rule_name: str) -> set[str]:
        """All markers recorded for a rule."""
        path = self.marker_file(rule_name)
        if not path.exists():
            return set()
        return {line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()}

    def check_and_record(self, rule_name: str, pr_number: str | int, labels: str | list[str] | None = None) -> bool:
        """
        Return True when every marker for this PR and labels is already recorded.

        Otherwise the missing markers are appended and False is returned. When
        the store is unusable the PR always counts as not yet checked.
        """
        if not self.is_available():
            return False

        required = marker_lines(pr_number, labels)
        try:
            recorded = self.recorded(rule_name)
            missing = [line for line in required if line not in recorded]
            if not missing:
                logger.debug("Rule already commented", rule=rule_name, pr_number=str(pr_number), markers=required)
                return True

            # A single write keeps concurrent appends from interleaving lines.
            with self.marker_file(rule_name).open("a", encoding="utf-8") as marker_file:
                marker_file.write("".join(f"{line}\n" for line in missing))
        except OSError as e:
            logger.error("Unable to use marker file", rule=rule_name, error=str(e))
            return False

        logger.info("Recorded rule markers", rule=rule_name, pr_number=str(pr_number), markers=missing)
        return False
