from enum import Enum
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union
from datetime import datetime, timedelta, date, time
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from threading import RLock
import uuid

from passlib.context import CryptContext


# ==================== Enums ====================

class ReservationStatus(Enum):
    """Reservation status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    """Payment status"""
    PENDING = "pending"
    PROCESSED = "processed"
    REFUNDED = "refunded"


class PaymentMethodType(Enum):
    """Supported payment method tags"""
    CREDIT_CARD = "creditcard"
    CASH = "cash"
    PAYPAL = "paypal"


# ==================== Errors ====================

class ReservationError(Exception):
    """Base class for reservation domain errors"""
    pass


class NoAvailabilityError(ReservationError):
    """No table satisfies the capacity and slot constraints"""
    pass


class InvalidReservationError(ReservationError, ValueError):
    """Reservation request is malformed"""
    pass


class AuthenticationError(ReservationError):
    """Session token does not resolve to a customer"""
    pass


# ==================== Models ====================

class Slot:
    """Half-open time interval [start, end)"""

    def __init__(self, start: datetime, end: datetime):
        if start >= end:
            raise ValueError("Start time must be before end time")
        self._start = start
        self._end = end

    def get_start(self) -> datetime:
        return self._start

    def get_end(self) -> datetime:
        return self._end

    def get_duration(self) -> timedelta:
        return self._end - self._start

    def overlaps(self, other: 'Slot') -> bool:
        """Touching endpoints do not overlap"""
        return self._start < other._end and self._end > other._start

    def contains(self, other: 'Slot') -> bool:
        """Check if other lies entirely within this slot"""
        return self._start <= other._start and other._end <= self._end

    def __eq__(self, other) -> bool:
        if not isinstance(other, Slot):
            return False
        return self._start == other._start and self._end == other._end

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __repr__(self) -> str:
        return f"[{self._start.isoformat()}, {self._end.isoformat()})"

    def to_dict(self) -> Dict:
        return {
            'start': self._start.isoformat(),
            'end': self._end.isoformat(),
            'duration_minutes': int(self.get_duration().total_seconds() // 60)
        }


@dataclass
class ReservationDetails:
    """What the customer asks for"""
    slot: Slot
    number_of_guests: int
    special_requests: List[str] = field(default_factory=list)

    @classmethod
    def for_window(cls, start: datetime, end: datetime,
                   number_of_guests: int) -> 'ReservationDetails':
        return cls(Slot(start, end), number_of_guests)


class Customer:
    """Registered customer"""

    def __init__(self, customer_id: str, name: str, phone_number: str,
                 email: str, password_hash: str):
        self._customer_id = customer_id
        self._name = name
        self._phone_number = phone_number
        self._email = email
        self._password_hash = password_hash
        self._created_at = datetime.now()

    def get_id(self) -> str:
        return self._customer_id

    def get_name(self) -> str:
        return self._name

    def get_phone_number(self) -> str:
        return self._phone_number

    def get_email(self) -> str:
        return self._email

    def get_password_hash(self) -> str:
        return self._password_hash

    def verify_password(self, password: str, encoder: 'PasswordEncoder') -> bool:
        return encoder.matches(password, self._password_hash)

    def update_profile(self, details: Optional[Dict]) -> bool:
        """Update contact fields; missing or empty values keep the old ones"""
        if not details:
            return False

        self._name = details.get('name') or self._name
        self._phone_number = details.get('phone_number') or self._phone_number
        self._email = details.get('email') or self._email
        return True

    def to_dict(self) -> Dict:
        return {
            'customer_id': self._customer_id,
            'name': self._name,
            'phone_number': self._phone_number,
            'email': self._email
        }


# ==================== Availability Policies ====================

class AvailabilityPolicy(ABC):
    """Decides whether a table's free slots admit a requested slot"""

    @abstractmethod
    def is_available(self, free_slots: List[Slot], requested: Slot) -> bool:
        pass


class AnyNonOverlappingSlotPolicy(AvailabilityPolicy):
    """
    Available when any free slot does not overlap the request.

    This reproduces the historical rule: a table keeps reporting itself
    available for an already booked window as long as it still holds some
    unrelated free slot. Use ContainingSlotPolicy for exact matching.
    """

    def is_available(self, free_slots: List[Slot], requested: Slot) -> bool:
        return any(not slot.overlaps(requested) for slot in free_slots)


class ContainingSlotPolicy(AvailabilityPolicy):
    """Available when the request fits inside one of the free slots"""

    def is_available(self, free_slots: List[Slot], requested: Slot) -> bool:
        return any(slot.contains(requested) for slot in free_slots)


class Table:
    """Restaurant table with its bookable windows"""

    def __init__(self, table_id: str, waiter_name: str, capacity: int,
                 location: str,
                 availability_policy: Optional[AvailabilityPolicy] = None):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"Capacity must be a positive integer: {capacity}")

        self._table_id = table_id
        self._waiter_name = waiter_name
        self._capacity = capacity
        self._location = location
        self._availability_policy = availability_policy or AnyNonOverlappingSlotPolicy()

        # Insertion ordered, pairwise non-overlapping
        self._free_slots: List[Slot] = []

    def get_id(self) -> str:
        return self._table_id

    def get_waiter_name(self) -> str:
        return self._waiter_name

    def get_capacity(self) -> int:
        return self._capacity

    def get_location(self) -> str:
        return self._location

    def get_free_slots(self) -> List[Slot]:
        return self._free_slots.copy()

    def get_availability_policy(self) -> AvailabilityPolicy:
        return self._availability_policy

    def set_availability_policy(self, policy: AvailabilityPolicy) -> None:
        self._availability_policy = policy

    def add_free_slot(self, slot: Slot) -> None:
        """Open a bookable window on this table"""
        for existing in self._free_slots:
            if existing.overlaps(slot):
                raise ValueError(f"Slot {slot} overlaps free slot {existing}")
        self._free_slots.append(slot)

    def is_available(self, requested: Slot) -> bool:
        return self._availability_policy.is_available(self._free_slots, requested)

    def mark_reserved(self, requested: Slot) -> bool:
        """Drop every free slot overlapping the request"""
        self._free_slots = [s for s in self._free_slots if not s.overlaps(requested)]
        return True

    def release_slot(self, slot: Slot) -> bool:
        """Give a slot back, unless it collides with a window already free"""
        if any(existing.overlaps(slot) for existing in self._free_slots):
            return False
        self._free_slots.append(slot)
        return True

    def to_dict(self) -> Dict:
        return {
            'table_id': self._table_id,
            'waiter': self._waiter_name,
            'capacity': self._capacity,
            'location': self._location,
            'free_slots': [s.to_dict() for s in self._free_slots]
        }


class Restaurant:
    """Restaurant owning its tables"""

    def __init__(self, restaurant_id: str, name: str, address: str,
                 opening_hours: str):
        self._restaurant_id = restaurant_id
        self._name = name
        self._address = address
        self._opening_hours = opening_hours

        # Tables in insertion order
        self._tables: Dict[str, Table] = {}

    def get_id(self) -> str:
        return self._restaurant_id

    def get_name(self) -> str:
        return self._name

    def get_address(self) -> str:
        return self._address

    def get_opening_hours(self) -> str:
        return self._opening_hours

    def add_table(self, table: Table) -> None:
        self._tables[table.get_id()] = table

    def remove_table(self, table_id: str) -> None:
        self._tables.pop(table_id, None)

    def get_table(self, table_id: str) -> Optional[Table]:
        return self._tables.get(table_id)

    def get_all_tables(self) -> List[Table]:
        return list(self._tables.values())

    def find_available_tables(self, slot: Slot, guests: int) -> List[Table]:
        """Tables large enough and free for the slot, in insertion order"""
        return [
            table for table in self._tables.values()
            if table.get_capacity() >= guests and table.is_available(slot)
        ]

    def to_dict(self) -> Dict:
        return {
            'restaurant_id': self._restaurant_id,
            'name': self._name,
            'address': self._address,
            'opening_hours': self._opening_hours,
            'total_tables': len(self._tables)
        }


class Payment:
    """Payment attached to a reservation"""

    def __init__(self, payment_id: str, amount: Decimal,
                 method: PaymentMethodType, reservation_id: str):
        self._payment_id = payment_id
        self._amount = amount
        self._method = method
        self._reservation_id = reservation_id
        self._status = PaymentStatus.PENDING
        self._processed_at: Optional[datetime] = None
        self._refunded_at: Optional[datetime] = None

    def get_id(self) -> str:
        return self._payment_id

    def get_amount(self) -> Decimal:
        return self._amount

    def get_method(self) -> PaymentMethodType:
        return self._method

    def get_reservation_id(self) -> str:
        return self._reservation_id

    def get_status(self) -> PaymentStatus:
        return self._status

    def process(self) -> bool:
        self._status = PaymentStatus.PROCESSED
        self._processed_at = datetime.now()
        return True

    def refund(self) -> bool:
        self._status = PaymentStatus.REFUNDED
        self._refunded_at = datetime.now()
        return True

    def to_dict(self) -> Dict:
        return {
            'payment_id': self._payment_id,
            'amount': str(self._amount),
            'method': self._method.value,
            'status': self._status.value,
            'reservation_id': self._reservation_id
        }


class Reservation:
    """Outcome of a booking request"""

    def __init__(self, reservation_id: str, customer: Customer, table: Table,
                 details: ReservationDetails, payment: Optional[Payment] = None):
        self._reservation_id = reservation_id
        self._slot = details.slot
        self._number_of_guests = details.number_of_guests
        self._customer = customer
        self._table = table
        self._details = details
        self._payment = payment
        self._status = ReservationStatus.PENDING

        # Timestamps
        self._created_at = datetime.now()
        self._confirmed_at: Optional[datetime] = None
        self._cancelled_at: Optional[datetime] = None

    def get_id(self) -> str:
        return self._reservation_id

    def get_slot(self) -> Slot:
        return self._slot

    def get_number_of_guests(self) -> int:
        return self._number_of_guests

    def get_customer(self) -> Customer:
        return self._customer

    def get_table(self) -> Table:
        return self._table

    def get_details(self) -> ReservationDetails:
        return self._details

    def get_payment(self) -> Optional[Payment]:
        return self._payment

    def set_payment(self, payment: Payment) -> None:
        self._payment = payment

    def get_status(self) -> ReservationStatus:
        return self._status

    def confirm(self) -> bool:
        if self._status != ReservationStatus.PENDING:
            return False

        self._status = ReservationStatus.CONFIRMED
        self._confirmed_at = datetime.now()
        return True

    def cancel(self) -> bool:
        if self._status == ReservationStatus.CANCELLED:
            return False

        self._status = ReservationStatus.CANCELLED
        self._cancelled_at = datetime.now()
        return True

    def update_details(self, details: ReservationDetails) -> bool:
        """
        Replace the request record only.

        The booked slot, guest count and table stay as committed; get_slot()
        and get_number_of_guests() keep reporting the booking.
        """
        self._details = details
        return True

    def process_payment(self) -> bool:
        return self._payment.process() if self._payment else False

    def to_dict(self) -> Dict:
        return {
            'reservation_id': self._reservation_id,
            'customer': self._customer.to_dict(),
            'table_id': self._table.get_id(),
            'slot': self._slot.to_dict(),
            'guests': self._number_of_guests,
            'status': self._status.value,
            'special_requests': list(self._details.special_requests),
            'payment': self._payment.to_dict() if self._payment else None,
            'created_at': self._created_at.isoformat(),
            'confirmed_at': self._confirmed_at.isoformat() if self._confirmed_at else None
        }


# ==================== Table Selection ====================

class TableSelectionStrategy(ABC):
    """Picks one table among the candidates"""

    @abstractmethod
    def select(self, tables: List[Table], guests: int) -> Optional[Table]:
        pass


class SmallestFitStrategy(TableSelectionStrategy):
    """Smallest sufficient capacity; ties keep candidate order"""

    def select(self, tables: List[Table], guests: int) -> Optional[Table]:
        fitting = [t for t in tables if t.get_capacity() >= guests]
        if not fitting:
            return None
        # sorted() is stable
        return sorted(fitting, key=lambda t: t.get_capacity())[0]


# ==================== Cancellation Policies ====================

class SlotReleasePolicy(ABC):
    """What happens to a table's slot when its reservation is cancelled"""

    @abstractmethod
    def on_cancel(self, reservation: Reservation) -> None:
        pass


class KeepSlotConsumedPolicy(SlotReleasePolicy):
    """A booked slot stays consumed after cancellation"""

    def on_cancel(self, reservation: Reservation) -> None:
        pass


class ReleaseSlotOnCancelPolicy(SlotReleasePolicy):
    """Return the reserved slot to the table's free slots"""

    def on_cancel(self, reservation: Reservation) -> None:
        table = reservation.get_table()
        if table.release_slot(reservation.get_slot()):
            print(f"🔓 Slot {reservation.get_slot()} released on table {table.get_id()}")


# ==================== Authentication ====================

class PasswordEncoder:
    """Password hashing through a passlib context"""

    def __init__(self, iterations: Optional[int] = None):
        # Rounds are stored in each hash, so encoders with different
        # settings still verify each other's hashes
        settings = {'pbkdf2_sha256__rounds': iterations} if iterations else {}
        self._context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto",
                                     **settings)

    def encode(self, password: str) -> str:
        return self._context.hash(password)

    def matches(self, password: str, encoded: str) -> bool:
        if not encoded or not self._context.identify(encoded):
            return False
        return self._context.verify(password, encoded)


class UserRepository:
    """In-memory customer store"""

    def __init__(self):
        self._customers: Dict[str, Customer] = {}

    def save(self, customer: Customer) -> bool:
        self._customers[customer.get_id()] = customer
        return True

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def find_by_email(self, email: str) -> Optional[Customer]:
        for customer in self._customers.values():
            if customer.get_email().lower() == email.lower():
                return customer
        return None

    def get_all(self) -> List[Customer]:
        return list(self._customers.values())


@dataclass
class AuthResponse:
    """Session token issued on registration or login"""
    token: str
    customer: Customer


class AuthenticationService:
    """Registration, login and session lookup"""

    def __init__(self, user_repository: UserRepository,
                 password_encoder: PasswordEncoder):
        self._user_repository = user_repository
        self._password_encoder = password_encoder

        # token -> customer_id
        self._sessions: Dict[str, str] = {}

    def register_customer(self, details: Dict) -> AuthResponse:
        """Register a customer and open a session"""
        email = details['email']
        if self._user_repository.find_by_email(email):
            raise ValueError(f"Email already registered: {email}")

        customer = Customer(
            str(uuid.uuid4()),
            details['name'],
            details.get('phone_number', ''),
            email,
            self._password_encoder.encode(details['password'])
        )
        self._user_repository.save(customer)

        print(f"✅ Customer registered: {customer.get_name()}")
        return AuthResponse(self._open_session(customer), customer)

    def login(self, email: str, password: str) -> Optional[AuthResponse]:
        customer = self._user_repository.find_by_email(email)
        if customer and customer.verify_password(password, self._password_encoder):
            print(f"✅ Logged in: {customer.get_name()}")
            return AuthResponse(self._open_session(customer), customer)

        print(f"❌ Invalid credentials for {email}")
        return None

    def logout(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def get_current_customer(self, token: str) -> Customer:
        """Resolve the customer behind a session token"""
        customer_id = self._sessions.get(token)
        customer = self._user_repository.find_by_id(customer_id) if customer_id else None
        if not customer:
            raise AuthenticationError("Invalid or expired session token")
        return customer

    def _open_session(self, customer: Customer) -> str:
        token = uuid.uuid4().hex
        self._sessions[token] = customer.get_id()
        return token


# ==================== Payment ====================

class PaymentStrategy(ABC):
    """Interchangeable payment method behaviour"""

    @abstractmethod
    def process_payment(self, amount: Decimal) -> bool:
        pass

    @abstractmethod
    def refund_payment(self, amount: Decimal) -> bool:
        pass


class CreditCardPayment(PaymentStrategy):

    def process_payment(self, amount: Decimal) -> bool:
        print(f"💳 Processing credit card payment of ${amount}")
        return True

    def refund_payment(self, amount: Decimal) -> bool:
        print(f"💳 Refunding credit card payment of ${amount}")
        return True


class CashPayment(PaymentStrategy):

    def process_payment(self, amount: Decimal) -> bool:
        print(f"💵 Processing cash payment of ${amount}")
        return True

    def refund_payment(self, amount: Decimal) -> bool:
        print(f"💵 Refunding cash payment of ${amount}")
        return True


class PayPalPayment(PaymentStrategy):

    def process_payment(self, amount: Decimal) -> bool:
        print(f"🅿️  Processing PayPal payment of ${amount}")
        return True

    def refund_payment(self, amount: Decimal) -> bool:
        print(f"🅿️  Refunding PayPal payment of ${amount}")
        return True


def to_payment_method(method: Union[PaymentMethodType, str]) -> PaymentMethodType:
    if isinstance(method, PaymentMethodType):
        return method
    try:
        return PaymentMethodType(str(method).lower())
    except ValueError:
        raise ValueError(f"Unknown payment method: {method}") from None


def create_payment_strategy(method: Union[PaymentMethodType, str]) -> PaymentStrategy:
    """Build the strategy for a payment method tag"""
    strategies = {
        PaymentMethodType.CREDIT_CARD: CreditCardPayment,
        PaymentMethodType.CASH: CashPayment,
        PaymentMethodType.PAYPAL: PayPalPayment,
    }
    return strategies[to_payment_method(method)]()


class PaymentRepository:
    """In-memory payment store"""

    def __init__(self):
        self._payments: List[Payment] = []

    def save(self, payment: Payment) -> bool:
        self._payments.append(payment)
        return True

    def find_by_id(self, payment_id: str) -> Optional[Payment]:
        return next((p for p in self._payments if p.get_id() == payment_id), None)

    def find_by_reservation(self, reservation_id: str) -> Optional[Payment]:
        return next(
            (p for p in self._payments if p.get_reservation_id() == reservation_id),
            None
        )


class PaymentProcessor:
    """Runs payments through the configured strategy"""

    def __init__(self, payment_repository: PaymentRepository,
                 payment_strategy: PaymentStrategy):
        self._payment_repository = payment_repository
        self._payment_strategy = payment_strategy

    def get_payment_strategy(self) -> PaymentStrategy:
        return self._payment_strategy

    def set_payment_strategy(self, payment_strategy: PaymentStrategy) -> None:
        self._payment_strategy = payment_strategy

    def process_payment(self, payment: Payment) -> bool:
        result = self._payment_strategy.process_payment(payment.get_amount())
        if result:
            payment.process()
            self._payment_repository.save(payment)
        return result

    def refund_payment(self, payment: Payment) -> bool:
        result = self._payment_strategy.refund_payment(payment.get_amount())
        if result:
            payment.refund()
        return result


# ==================== Notification ====================

class NotificationChannel(ABC):
    """Delivery channel for reservation notices"""

    @abstractmethod
    def send_confirmation(self, customer: Customer, reservation: Reservation) -> bool:
        pass

    @abstractmethod
    def send_cancellation(self, reservation_id: str) -> bool:
        pass


class EmailChannel(NotificationChannel):

    def send_confirmation(self, customer: Customer, reservation: Reservation) -> bool:
        slot = reservation.get_slot()
        print(f"📧 Email to {customer.get_email()}: reservation "
              f"{reservation.get_id()[:8]} confirmed for "
              f"{slot.get_start().strftime('%Y-%m-%d %H:%M')}")
        return True

    def send_cancellation(self, reservation_id: str) -> bool:
        print(f"📧 Email: reservation {reservation_id[:8]} cancelled")
        return True


class SMSChannel(NotificationChannel):

    def send_confirmation(self, customer: Customer, reservation: Reservation) -> bool:
        print(f"📱 SMS to {customer.get_phone_number()}: table "
              f"{reservation.get_table().get_id()} booked for "
              f"{reservation.get_number_of_guests()}")
        return True

    def send_cancellation(self, reservation_id: str) -> bool:
        print(f"📱 SMS: reservation {reservation_id[:8]} cancelled")
        return True


class NotificationService:
    """Fans notices out to every registered channel"""

    def __init__(self, channels: Optional[List[NotificationChannel]] = None):
        self._channels: List[NotificationChannel] = list(channels or [])

    def register_channel(self, channel: NotificationChannel) -> None:
        self._channels.append(channel)

    def get_channels(self) -> List[NotificationChannel]:
        return self._channels.copy()

    def send_confirmation(self, customer: Customer, reservation: Reservation) -> int:
        return self._dispatch(lambda c: c.send_confirmation(customer, reservation))

    def send_cancellation(self, reservation_id: str) -> int:
        return self._dispatch(lambda c: c.send_cancellation(reservation_id))

    def _dispatch(self, send) -> int:
        """Returns the number of channels that delivered"""
        delivered = 0
        for channel in self._channels:
            try:
                if send(channel):
                    delivered += 1
            except Exception as e:
                print(f"⚠️  {type(channel).__name__} failed: {e}")
        return delivered


# ==================== Reservation Service ====================

class ReservationService:
    """
    Availability lookup, table assignment and reservation lifecycle.

    The whole commit (search, select, mark reserved, store, confirm) runs
    under one lock so two callers cannot book the same window twice.
    """

    def __init__(self, restaurant: Restaurant,
                 auth_service: AuthenticationService,
                 selection_strategy: Optional[TableSelectionStrategy] = None,
                 release_policy: Optional[SlotReleasePolicy] = None):
        self._restaurant = restaurant
        self._auth_service = auth_service
        self._selection_strategy = selection_strategy or SmallestFitStrategy()
        self._release_policy = release_policy or KeepSlotConsumedPolicy()

        self._reservations: List[Reservation] = []
        self._lock = RLock()

    def get_restaurant(self) -> Restaurant:
        return self._restaurant

    def create_reservation(self, token: str,
                           details: ReservationDetails) -> Reservation:
        """Book the best-fitting table or raise NoAvailabilityError"""
        customer = self._auth_service.get_current_customer(token)
        guests = details.number_of_guests

        if isinstance(guests, bool) or not isinstance(guests, int) or guests <= 0:
            raise InvalidReservationError(f"Number of guests must be positive: {guests}")

        with self._lock:
            tables = self._restaurant.find_available_tables(details.slot, guests)
            if not tables:
                print(f"❌ No tables available for {guests} guests at {details.slot}")
                raise NoAvailabilityError("No available tables for the selected slot")

            table = self.select_best_table(tables, guests)
            if table is None:
                raise NoAvailabilityError("No available tables for the selected slot")

            table.mark_reserved(details.slot)
            reservation = Reservation(str(uuid.uuid4()), customer, table, details)
            self._reservations.append(reservation)
            reservation.confirm()

        print(f"✅ Reservation {reservation.get_id()[:8]} confirmed for "
              f"{customer.get_name()}: table {table.get_id()} "
              f"(capacity {table.get_capacity()}), {guests} guests")
        return reservation

    def select_best_table(self, tables: List[Table], guests: int) -> Optional[Table]:
        return self._selection_strategy.select(tables, guests)

    def cancel_reservation(self, token: str, reservation_id: str) -> bool:
        self._auth_service.get_current_customer(token)

        with self._lock:
            reservation = self._find(reservation_id)
            if not reservation:
                print(f"❌ Reservation not found: {reservation_id}")
                return False

            if not reservation.cancel():
                print(f"⚠️  Reservation {reservation_id[:8]} already cancelled")
                return False

            self._release_policy.on_cancel(reservation)

        print(f"✅ Reservation {reservation_id[:8]} cancelled")
        return True

    def find_reservation(self, token: str, reservation_id: str) -> Optional[Reservation]:
        self._auth_service.get_current_customer(token)
        return self._find(reservation_id)

    def get_customer_reservations(self, token: str) -> List[Reservation]:
        customer = self._auth_service.get_current_customer(token)
        return [
            r for r in self._reservations
            if r.get_customer().get_id() == customer.get_id()
        ]

    def get_all_reservations(self) -> List[Reservation]:
        return self._reservations.copy()

    def _find(self, reservation_id: str) -> Optional[Reservation]:
        for reservation in self._reservations:
            if reservation.get_id() == reservation_id:
                return reservation
        return None


class PaymentService:
    """Charges and refunds reservation payments"""

    def __init__(self, reservation_service: ReservationService,
                 auth_service: AuthenticationService,
                 payment_repository: PaymentRepository):
        self._reservation_service = reservation_service
        self._auth_service = auth_service
        self._payment_repository = payment_repository

    def process_reservation_payment(self, token: str, reservation_id: str,
                                    payment_details: Dict) -> Optional[Payment]:
        """
        Charge a reservation.

        payment_details: {'amount': Decimal-compatible, 'method': tag}
        Returns the processed payment, or None when the reservation is
        unknown, not the caller's, or cancelled.
        """
        customer = self._auth_service.get_current_customer(token)
        reservation = self._reservation_service.find_reservation(token, reservation_id)

        if not reservation or reservation.get_customer().get_id() != customer.get_id():
            print(f"❌ Reservation not found: {reservation_id}")
            return None

        if reservation.get_status() == ReservationStatus.CANCELLED:
            print(f"❌ Reservation {reservation_id[:8]} is cancelled")
            return None

        current = reservation.get_payment()
        if current and current.get_status() == PaymentStatus.PROCESSED:
            print(f"❌ Reservation {reservation_id[:8]} is already paid")
            return None

        try:
            amount = Decimal(str(payment_details['amount']))
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {payment_details['amount']}") from None
        if not amount.is_finite() or amount <= 0:
            raise ValueError("Amount must be a positive finite number")

        method = to_payment_method(payment_details['method'])
        processor = PaymentProcessor(self._payment_repository,
                                     create_payment_strategy(method))
        payment = Payment(str(uuid.uuid4()), amount, method, reservation_id)

        if not processor.process_payment(payment):
            print(f"❌ Payment failed for reservation {reservation_id[:8]}")
            return None

        reservation.set_payment(payment)
        print(f"✅ Payment {payment.get_id()[:8]} processed: ${amount} via {method.value}")
        return payment

    def refund_reservation_payment(self, token: str, reservation_id: str) -> bool:
        customer = self._auth_service.get_current_customer(token)
        reservation = self._reservation_service.find_reservation(token, reservation_id)
        payment = reservation.get_payment() if reservation else None

        if not payment:
            return False
        if reservation.get_customer().get_id() != customer.get_id():
            return False
        if payment.get_status() != PaymentStatus.PROCESSED:
            return False

        processor = PaymentProcessor(self._payment_repository,
                                     create_payment_strategy(payment.get_method()))
        return processor.refund_payment(payment)


# ==================== Facade ====================

class ReservationServiceFacade:
    """Single entry point for presentation layers"""

    def __init__(self, reservation_service: ReservationService,
                 payment_service: PaymentService,
                 notification_service: NotificationService):
        self._reservation_service = reservation_service
        self._payment_service = payment_service
        self._notification_service = notification_service

    def create_reservation(self, token: str,
                           details: ReservationDetails) -> Reservation:
        reservation = self._reservation_service.create_reservation(token, details)
        self._notification_service.send_confirmation(reservation.get_customer(), reservation)
        return reservation

    def cancel_reservation(self, token: str, reservation_id: str) -> bool:
        cancelled = self._reservation_service.cancel_reservation(token, reservation_id)
        if cancelled:
            self._notification_service.send_cancellation(reservation_id)
        return cancelled

    def process_reservation_payment(self, token: str, reservation_id: str,
                                    payment_details: Dict) -> Optional[Payment]:
        return self._payment_service.process_reservation_payment(
            token, reservation_id, payment_details
        )

    def find_reservation(self, token: str, reservation_id: str) -> Optional[Reservation]:
        return self._reservation_service.find_reservation(token, reservation_id)

    def get_customer_reservations(self, token: str) -> List[Reservation]:
        return self._reservation_service.get_customer_reservations(token)


# ==================== Demo ====================

def print_section(title: str) -> None:
    """Print section header"""
    print(f"\n{'=' * 70}")
    print(f" {title}")
    print('=' * 70)


def demo_restaurant_reservation():
    """Walk through booking, payment and cancellation"""

    print_section("RESTAURANT RESERVATION DEMO")

    evening = date.today() + timedelta(days=1)
    dinner = Slot(datetime.combine(evening, time(18, 0)),
                  datetime.combine(evening, time(20, 0)))
    late = Slot(datetime.combine(evening, time(20, 0)),
                datetime.combine(evening, time(22, 0)))

    # ==================== Setup ====================
    print_section("1. Setup Restaurant")

    restaurant = Restaurant("R1", "The Italian Corner", "12 Main Street", "17:00-23:00")
    for table_id, waiter, capacity, location in [
        ("1", "Marco", 2, "Window"),
        ("2", "Giulia", 4, "Main Dining"),
        ("3", "Luca", 6, "Patio"),
    ]:
        table = Table(table_id, waiter, capacity, location, ContainingSlotPolicy())
        table.add_free_slot(dinner)
        table.add_free_slot(late)
        restaurant.add_table(table)

    print(f"✅ {restaurant.get_name()}: {len(restaurant.get_all_tables())} tables")

    auth = AuthenticationService(UserRepository(), PasswordEncoder())
    reservations = ReservationService(restaurant, auth)
    payments = PaymentService(reservations, auth, PaymentRepository())
    notifications = NotificationService([EmailChannel(), SMSChannel()])
    facade = ReservationServiceFacade(reservations, payments, notifications)

    # ==================== Customers ====================
    print_section("2. Register & Login")

    auth.register_customer({
        'name': "Alice Johnson", 'phone_number': "+1-555-0101",
        'email': "alice@email.com", 'password': "s3cret"
    })
    session = auth.login("alice@email.com", "s3cret")
    auth.login("alice@email.com", "wrong")

    # ==================== Booking ====================
    print_section("3. Book Tables")

    first = facade.create_reservation(session.token, ReservationDetails(dinner, 4))
    second = facade.create_reservation(session.token, ReservationDetails(dinner, 4))

    try:
        facade.create_reservation(session.token, ReservationDetails(dinner, 4))
    except NoAvailabilityError as e:
        print(f"⚠️  {e}")

    # ==================== Payment ====================
    print_section("4. Payment")

    facade.process_reservation_payment(
        session.token, first.get_id(), {'amount': "120.00", 'method': "creditcard"}
    )

    # ==================== Cancellation ====================
    print_section("5. Cancellation")

    facade.cancel_reservation(session.token, second.get_id())
    facade.cancel_reservation(session.token, second.get_id())

    print(f"\n📋 Alice's reservations:")
    for reservation in facade.get_customer_reservations(session.token):
        info = reservation.to_dict()
        print(f"   • {info['reservation_id'][:8]} table {info['table_id']} "
              f"({info['guests']} guests) - {info['status']}")

    print_section("Demo Complete")


if __name__ == "__main__":
    try:
        demo_restaurant_reservation()
    except KeyboardInterrupt:
        print("\n\n⚠️  Demo interrupted by user")
