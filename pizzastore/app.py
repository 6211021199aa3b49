import logging
import signal
import sys

from termcolor import cprint
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from .config import parse_config, setup_logging
from .database import DatabaseManager
from .errors import FatalStartup
from .menus import StoreCLI

logger = logging.getLogger(__name__)


def greeting():
    """print the start banner"""
    cprint("""
*******************************************************
              pizza store user interface 🍕
*******************************************************
""", "green", attrs=["bold"])


# signal handler
class SignalHandler:
    """custom ctrl+c handler to nag user politely"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use exit!", "yellow")
        sys.exit(0)


# entry point
def main(argv: list[str] | None = None) -> int:
    """parse entry parameters, connect, run the menus, always disconnect"""
    # fix windows terminal misinterpreting ansi escape sequences
    enable_windows_ansi_interpretation()
    try:
        config = parse_config(argv)
        setup_logging(config.log_level)
        logger.info("starting with %s", config.label)
        greeting()
        print(f"connecting to {config.label}...")
        db = DatabaseManager(config.database_path, seed=config.seed)
    except FatalStartup as e:
        cprint(f"error: {e}", "red", file=sys.stderr)
        return 1

    signal.signal(signal.SIGINT, SignalHandler.sigint)
    with db:
        try:
            StoreCLI(db).run()
        finally:
            print("disconnecting from database... ", end="")
    cprint("done\n\nbye!", "green")
    return 0
