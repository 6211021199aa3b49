"""
Shared fixtures: an in-memory store with a small known catalog and four users.

    alice / pw1  customer
    bob   / pw2  customer
    carol / pw3  manager
    dave  / pw4  driver (stored with stray whitespace and capitals)
"""
import pytest

from pizzastore.database import DatabaseManager
from pizzastore.session import Role, Session

ITEMS = [
    ("Cheese Pizza", "dough, cheese", "Pizza", 9.99, "plain"),
    ("Deluxe Pizza", "dough, cheese, peppers", " pizza ", 10.00, "right on the line"),
    ("Supreme Pizza", "dough, everything", "PIZZA", 10.01, "one cent over"),
    ("Meat Lovers", "dough, meat", "pizza", 14.50, None),
    ("Garlic Bread", "bread, garlic", "Sides", 3.50, "warm"),
    ("Soda", "water, syrup", "drinks", 1.99, "cold"),
]

USERS = [
    ("alice", "pw1", "customer", None, "111-1111"),
    ("bob", "pw2", "customer", "pepperoni", "222-2222"),
    ("carol", "pw3", "manager", None, "333-3333"),
    ("dave", "pw4", " Driver ", None, "444-4444"),
]


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def db():
    with DatabaseManager(":memory:", seed=False) as db:
        db.conn.executemany(
            "INSERT INTO Items(itemName, ingredients, typeOfItem, price, description) VALUES (?,?,?,?,?);",
            ITEMS,
        )
        db.conn.executemany(
            "INSERT INTO users(login, password, role, favoriteItems, phoneNum) VALUES (?,?,?,?,?);",
            USERS,
        )
        yield db


@pytest.fixture
def stored(db):
    """read one column of one user straight from the table"""
    def read(login: str, column: str):
        rows = db.conn.execute(f"SELECT {column} FROM users WHERE login = ?;", (login,)).fetchall()
        return rows[0][0] if rows else None
    return read


@pytest.fixture
def alice():
    return Session("alice", Role.CUSTOMER)


@pytest.fixture
def carol():
    return Session("carol", Role.MANAGER)


@pytest.fixture
def dave():
    return Session("dave", Role.DRIVER)


@pytest.fixture
def feed_input(monkeypatch):
    """script answers for input(); exceptions are raised, running out behaves like end of stdin"""
    def feed(*answers):
        it = iter(answers)

        def fake_input(prompt=""):
            try:
                answer = next(it)
            except StopIteration:
                raise EOFError from None
            if isinstance(answer, BaseException):
                raise answer
            return answer

        monkeypatch.setattr("builtins.input", fake_input)
    return feed
