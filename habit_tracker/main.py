"""Main entry point: load tracker state and report today's progress"""
import logging
import sys

from habit_tracker.config import validate_config, DATA_PATH, LOG_LEVEL
from habit_tracker.exceptions import ConfigurationError
from habit_tracker.persistence import JsonFileStorage
from habit_tracker.state import HabitTrackerState
from habit_tracker.utils import civil_time

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def main() -> int:
    """Main application entry point"""
    try:
        logger.info("Validating configuration...")
        validate_config()
    except ConfigurationError:
        return 1

    logger.info(f"Loading tracker state from {DATA_PATH}...")
    state = HabitTrackerState(JsonFileStorage(DATA_PATH))
    state.load()

    try:
        dashboard = state.get_dashboard()
        goal = dashboard["goal"]
        logger.info(
            f"{civil_time.format_display(civil_time.today())}: "
            f"{goal['completed']}/{goal['goal']} habits done "
            f"({dashboard['today_completion']:.0f}% of catalog), "
            f"best current streak {dashboard['best_current_streak']} days"
        )

        latest = state.get_latest_weight()
        if latest is not None:
            logger.info(f"Latest weight: {latest.weight} kg on {latest.date}")
    finally:
        state.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
