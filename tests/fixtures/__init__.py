"""Test fixtures: sample entities covering every naming rule."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from criteriaql.schema.entity import Entity, column


class BaseRecord(Entity):
    id: int = 0
    createdAt: datetime | None = None


class Order(BaseRecord):
    customerId: int = 0
    active: bool = True
    totalAmount: float = column("amount_total", default=0.0)
    status: str = ""


class ArchivedOrder(Order):
    """Two levels below BaseRecord: ``id`` is out of reach."""

    archivedBy: str = ""


class Customer(Entity):
    id: int = 0
    firstName: str = ""
    lastName: str = ""
    email: str = ""


class Patient(Entity):
    __tablename__: ClassVar[str] = "patients"

    id: int = 0
    firstName: str = column("fname", default="")
    nickName: str = column("   ", default="")


class OrderItem(Entity):
    id: int = 0
    orderId: int = 0
    sku: str = ""


class Address(Entity):
    id: int = 0
    customerId: int = 0
    city: str = ""


class BlankTable(Entity):
    __tablename__: ClassVar[str] = "  "

    id: int = 0


@dataclass
class Invoice:
    id: int = 0
    total: float = field(default=0.0, metadata={"column": "amount_total"})
    issuedOn: str = ""


class LegacyRow:
    rowId: int
    HTTPStatus: int


class Tagged:
    tag: str


class TaggedOrder(Tagged, BaseRecord):
    """``Tagged`` is the first listed base, ahead of the pydantic base."""

    note: str = ""


class Shipment(Entity):
    id: int = 0
    trackingCode: str = column("tracking_no")
