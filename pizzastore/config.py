"""startup configuration: entry parameters, constants and logging setup"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from termcolor import colored

from .errors import FatalStartup

# constants
DB_SUFFIX = ".db"
MEMORY_DB = ":memory:"
MAX_LOGIN_LENGTH = 50
SEPARATOR = "-" * 49
DEFAULT_MANAGER = ("admin", "admin", "000-000-0000")
DEFAULT_ITEMS = [
    # (itemName, ingredients, typeOfItem, price, description)
    ("Pepperoni", "dough, tomato sauce, mozzarella, pepperoni", "entree", 12.99, "classic pepperoni pizza"),
    ("Margherita", "dough, tomato sauce, mozzarella, basil", "entree", 10.00, "fresh basil and mozzarella"),
    ("Veggie Supreme", "dough, tomato sauce, peppers, onion, olives", "entree", 13.50, "loaded with vegetables"),
    ("Garlic Knots", "dough, garlic, butter, parmesan", "sides", 4.99, "six buttery knots"),
    ("Caesar Salad", "romaine, croutons, parmesan, caesar dressing", "sides", 6.25, "crisp side salad"),
    ("Soda", "carbonated water, syrup", "drinks", 1.99, "20oz fountain drink"),
    ("Lemonade", "lemon, sugar, water", "drinks", 2.49, "fresh squeezed"),
]

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


@dataclass(frozen=True)
class StoreConfig:
    """validated process entry parameters"""
    dbname: str
    port: int
    user: str
    log_level: str = "WARNING"
    seed: bool = True

    @property
    def database_path(self) -> str:
        """sqlite file backing the store (or :memory:)"""
        if self.dbname == MEMORY_DB or Path(self.dbname).suffix:
            return self.dbname
        return self.dbname + DB_SUFFIX

    @property
    def label(self) -> str:
        """connection label used in logs / banner"""
        return f"{self.user}@{self.database_path} (port {self.port})"


def build_parser() -> argparse.ArgumentParser:
    """cli parser for the entry parameters"""
    parser = argparse.ArgumentParser(
        prog="pizzastore",
        description="text-menu client for the pizza store database",
    )
    parser.add_argument("dbname", help="database name (sqlite file, .db appended if missing)")
    parser.add_argument("port", help="database port")
    parser.add_argument("user", help="database user")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="operator log verbosity (stderr)")
    parser.add_argument("--no-seed", action="store_true",
                        help="do not seed the default catalog and manager account")
    return parser


def parse_config(argv: list[str] | None = None) -> StoreConfig:
    """parse and validate entry parameters; malformed values are fatal"""
    args = build_parser().parse_args(argv)
    dbname = args.dbname.strip()
    user = args.user.strip()
    if not dbname:
        raise FatalStartup("database name cannot be empty")
    if not user:
        raise FatalStartup("database user cannot be empty")
    try:
        port = int(args.port)
    except ValueError:
        raise FatalStartup(f"port must be a number, got '{args.port}'") from None
    if not 1 <= port <= 65535:
        raise FatalStartup(f"port out of range: {port}")
    return StoreConfig(dbname, port, user, args.log_level, not args.no_seed)


class ColorFormatter(logging.Formatter):
    """colour the level name so errors stand out on the operator stream"""
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color = LEVEL_COLORS.get(record.levelname)
        return msg.replace(record.levelname, colored(record.levelname, color), 1) if color else msg


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """configure the package logger to write to stderr"""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(
        "%(asctime)s │ %(levelname)-8s │ %(name)-20s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root = logging.getLogger("pizzastore")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False
    return root
