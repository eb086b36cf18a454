import pytest

from restaurant_reservation import (
    AuthenticationService,
    ContainingSlotPolicy,
    PasswordEncoder,
    Restaurant,
    ReservationService,
    Slot,
    Table,
    UserRepository,
)
from tests.helpers import at


@pytest.fixture
def dinner() -> Slot:
    return Slot(at(18), at(20))


@pytest.fixture
def auth() -> AuthenticationService:
    return AuthenticationService(UserRepository(), PasswordEncoder(iterations=1))


@pytest.fixture
def token(auth) -> str:
    response = auth.register_customer({
        'name': "Alice", 'phone_number': "555-0101",
        'email': "alice@example.com", 'password': "pw"
    })
    return response.token


@pytest.fixture
def other_token(auth) -> str:
    response = auth.register_customer({
        'name': "Bob", 'phone_number': "555-0102",
        'email': "bob@example.com", 'password': "pw"
    })
    return response.token


@pytest.fixture
def restaurant(dinner) -> Restaurant:
    """Tables of capacity 2, 4 and 6, each free for dinner only"""
    restaurant = Restaurant("R1", "Corner", "1 Main St", "17:00-23:00")
    for table_id, capacity in [("1", 2), ("2", 4), ("3", 6)]:
        table = Table(table_id, "Waiter", capacity, "Main", ContainingSlotPolicy())
        table.add_free_slot(dinner)
        restaurant.add_table(table)
    return restaurant


@pytest.fixture
def service(restaurant, auth) -> ReservationService:
    return ReservationService(restaurant, auth)
