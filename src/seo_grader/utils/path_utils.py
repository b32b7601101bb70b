# src/seo_grader/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and project paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed 'seo_grader' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_project_root() -> Path:
        """
        Returns the absolute path of the source checkout.
        Searches upwards for a directory containing 'src' and 'pyproject.toml'.
        """
        current_path = PathUtils.get_package_root()
        while current_path != current_path.parent:
            src_dir = current_path / "src"
            pyproject_toml = current_path / "pyproject.toml"
            if src_dir.is_dir() and pyproject_toml.is_file():
                return current_path
            current_path = current_path.parent
        raise FileNotFoundError(
            "Could not find the project root. Search for a directory containing 'src' and 'pyproject.toml'.")

    @staticmethod
    def get_reports_dir() -> Path:
        """
        Returns the directory where report exports are written by default.
        Falls back to the current working directory for installed (non-checkout) use.
        """
        try:
            root = PathUtils.get_project_root()
        except FileNotFoundError:
            logger.debug("No project checkout found, using cwd for reports.")
            root = Path.cwd()
        path = root / ".seo_grader_reports"
        path.mkdir(parents=True, exist_ok=True)
        return path
