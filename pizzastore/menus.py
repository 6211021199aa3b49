"""numbered text menus; every action is isolated so one failure never ends the session"""

import logging
from typing import Callable

from termcolor import cprint, colored

from .accounts import AccountManager
from .catalog import CatalogManager, SortOrder
from .database import DatabaseManager
from .errors import PizzaStoreError, StorageFailure, ValidationFailure
from .helpers import parse_boolean_input, parse_price, require_text, safe_int
from .policy import editable_fields, refresh_role
from .profiles import ProfileUpdater
from .session import Role

logger = logging.getLogger(__name__)

SORT_CHOICES = {1: SortOrder.DESCENDING, 2: SortOrder.ASCENDING, 3: SortOrder.NONE}


def prompt(text: str) -> str:
    """read one trimmed line"""
    try:
        return input(colored(text, "magenta")).strip()
    except UnicodeDecodeError:
        raise ValidationFailure("input is not valid text") from None


def read_choice() -> int:
    """keep asking until an integer is entered"""
    while True:
        try:
            value = safe_int(input("please make your choice: ").strip())
        except UnicodeDecodeError:
            value = None
        if value is not None:
            return value
        cprint("your input is invalid!", "red")


# command infrastructure
class Command:
    """bind a menu number to a function"""
    def __init__(self, choice: int, description: str, function: Callable,
                 roles: frozenset[Role] | None = None, failure: str | None = None):
        self.choice = choice
        self.description = description
        self._fn = function
        self.roles = roles
        self.failure = failure or f"unable to {description.lower()}"

    def visible_to(self, role: Role | None) -> bool:
        """true if the role may see and pick this option"""
        return self.roles is None or role in self.roles

    def execute(self):
        """run the action, reporting failures instead of raising them"""
        try:
            return self._fn()
        except StorageFailure:
            cprint(f"error: {self.failure}.", "red")
        except PizzaStoreError as e:
            logger.info("%s failed: %s", self.description, e)
            cprint(f"error: {e}", "red")


class StoreCLI:
    """main menu + per-user menu over the account, profile and catalog engines"""
    STAFF = frozenset({Role.DRIVER, Role.MANAGER})
    MANAGERS = frozenset({Role.MANAGER})

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.accounts = AccountManager(db)
        self.profiles = ProfileUpdater(db)
        self.catalog = CatalogManager(db)
        self.main_commands = [
            Command(1, "Create user", self.create_user),
            Command(2, "Log in", self.log_in),
            Command(9, "< EXIT", self.quit),
        ]
        self.user_commands = [
            Command(1, "View Profile", self.view_profile, failure="unable to retrieve profile"),
            Command(2, "Update Profile", self.update_profile),
            Command(3, "View Menu", self.view_menu),
            Command(4, "Place Order", self.not_available("placing orders")),
            Command(5, "View Full Order ID History", self.not_available("order history")),
            Command(6, "View Past 5 Order IDs", self.not_available("recent orders")),
            Command(7, "View Order Information", self.not_available("order information")),
            Command(8, "View Stores", self.not_available("store listing")),
            Command(9, "Update Order Status", self.not_available("order status updates"), self.STAFF),
            Command(10, "Update Menu", self.not_available("menu updates"), self.MANAGERS),
            Command(11, "Update User", self.not_available("user administration"), self.MANAGERS),
            Command(12, "Who Am I", self.accounts.whoami),
            Command(20, "Log out", self.accounts.logout),
        ]
        self.running = True

    # menu plumbing
    @staticmethod
    def show(title: str, commands: list[Command], role: Role | None = None):
        """print numbered options visible to the role"""
        cprint(title, "green", attrs=["bold"])
        print("-" * len(title))
        for cmd in commands:
            if cmd.visible_to(role):
                print(f"{colored(str(cmd.choice), 'blue')}. {cmd.description}")

    @staticmethod
    def dispatch(choice: int, commands: list[Command], role: Role | None = None):
        """run the visible command bound to the choice"""
        cmd = next((c for c in commands if c.choice == choice and c.visible_to(role)), None)
        if cmd is None:
            cprint("unrecognized choice!", "red"); return
        cmd.execute()

    def run(self):
        """main loop; ends on exit or end of input"""
        try:
            while self.running:
                self.show("MAIN MENU", self.main_commands)
                self.dispatch(read_choice(), self.main_commands)
                if self.accounts.session is not None:
                    self.user_loop()
        except EOFError:
            print()

    def user_loop(self):
        """per-user menu until logout or exit"""
        while self.running and self.accounts.session is not None:
            role = self.accounts.session.role
            self.show("MAIN MENU", self.user_commands, role)
            print("." * 25)
            self.dispatch(read_choice(), self.user_commands, role)

    def quit(self):
        """stop the main loop"""
        self.running = False

    @staticmethod
    def not_available(what: str) -> Callable[[], None]:
        def stub():
            cprint(f"{what} is not yet available", "yellow")
        return stub

    # actions
    def create_user(self):
        """prompt for a new customer account"""
        login = prompt("enter login: ")
        password = prompt("enter password: ")
        phone = prompt("enter phone number: ")
        self.accounts.register(login, password, phone)
        cprint("user created successfully!", "green")

    def log_in(self):
        """prompt for credentials and start a session"""
        login = prompt("enter login: ")
        password = prompt("enter password: ")
        session = self.accounts.login(login, password)
        if session is None:
            cprint("invalid login or password", "red"); return
        cprint(f"logged in as {colored(session.login, 'yellow', attrs=['bold'])}", "green")

    def view_profile(self):
        """show any user's profile (blank login = yourself)"""
        login = prompt("enter login to view (blank for yourself): ") or self.accounts.session.login
        p = self.accounts.profile(login)
        print("login:", p.login)
        print("phone number:", p.phone_number or "")
        print("role:", p.role)
        print("favorite items:", p.favorite_items or "none")

    def update_profile(self):
        """pick a field and overwrite it (managers may pick the target)"""
        session = self.accounts.session
        role = refresh_role(self.db, session) or session.role
        target = session.login
        if role is Role.MANAGER:
            target = prompt("enter login to be updated (blank for yourself): ") or session.login
        fields = editable_fields(role)
        cprint("what would you like to update?", "green")
        for i, f in enumerate(fields, start=1):
            print(f"{colored(str(i), 'blue')}. {f.label}")
        choice = read_choice()
        if not 1 <= choice <= len(fields):
            cprint("invalid choice", "red"); return
        field = fields[choice - 1]
        value = prompt(f"enter new {field.label}: ")
        self.profiles.update_field(session, target, field, value)
        cprint(f"{field.label} updated for {target}", "green")

    def view_menu(self):
        """print the catalog, then optionally filter and sort it"""
        self.catalog.print_items(self.catalog.list_items())
        if not parse_boolean_input(prompt("would you like to filter your search? (y/N): "), handle_invalid=True):
            return
        cprint("filter by:", "green")
        print("1. price\n2. type\n3. both")
        filter_choice = read_choice()
        if filter_choice not in (1, 2, 3):
            cprint("invalid choice", "red"); return
        max_price = item_type = None
        if filter_choice in (2, 3):
            item_type = require_text(prompt("enter type of item: "), "type of item")
        if filter_choice in (1, 3):
            max_price = parse_price(prompt("enter maximum price: "))
        cprint("sort by price:", "green")
        print("1. highest to lowest\n2. lowest to highest\n3. neither")
        sort_order = SORT_CHOICES.get(read_choice(), SortOrder.NONE)
        self.catalog.print_items(self.catalog.list_items(max_price, item_type, sort_order))
