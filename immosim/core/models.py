"""Data model shared by the simulation core, the CLI and the UI.

The engine consumes a :class:`SimulationParams` value and produces a
:class:`SimulationResult`. Input records are frozen; the only mutable record is
:class:`LoanState`, which lives for exactly one simulation run.

Every model round-trips through ``to_dict`` / ``from_dict`` using the camelCase
keys of the stored scenario blob (``propertyPrice``, ``durationMonths``, ...),
so JSON scenario files written by the web front-end load unchanged.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, Sequence

import pandas as pd

ExpenseType = Literal["initial", "monthly", "yearly"]
PropertyType = Literal["ancien", "neuf"]

EXPENSE_TYPES: tuple[str, ...] = ("initial", "monthly", "yearly")


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from -inf (``Math.round`` semantics)."""
    return int(math.floor(float(x) + 0.5))


def _f(x, default: float = 0.0) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return float(default)


def _i(x, default: int = 0) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return int(default)


@dataclass(frozen=True)
class Loan:
    """A property loan. ``rate`` and ``insurance_rate`` are annual percents."""

    id: str
    name: str
    amount: float
    rate: float
    duration_months: int
    insurance_rate: float = 0.0
    deferred_months: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "rate": self.rate,
            "durationMonths": self.duration_months,
            "insuranceRate": self.insurance_rate,
            "deferredMonths": self.deferred_months,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Loan":
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", d.get("id", ""))),
            amount=_f(d.get("amount", 0.0)),
            rate=_f(d.get("rate", 0.0)),
            duration_months=_i(d.get("durationMonths", d.get("duration_months", 0))),
            insurance_rate=_f(d.get("insuranceRate", d.get("insurance_rate", 0.0))),
            deferred_months=_i(d.get("deferredMonths", d.get("deferred_months", 0))),
        )


@dataclass
class LoanState:
    """Per-run amortization state of one loan."""

    loan: Loan
    remaining_capital: float
    monthly_payment: float

    # Loan fields, read from the wrapped loan.
    @property
    def id(self) -> str:
        return self.loan.id

    @property
    def amount(self) -> float:
        return self.loan.amount

    @property
    def rate(self) -> float:
        return self.loan.rate

    @property
    def duration_months(self) -> int:
        return self.loan.duration_months

    @property
    def insurance_rate(self) -> float:
        return self.loan.insurance_rate

    @property
    def deferred_months(self) -> int:
        return self.loan.deferred_months


@dataclass(frozen=True)
class CustomExpense:
    """A user-defined cost tagged ``initial``, ``monthly`` or ``yearly``."""

    id: str
    name: str
    amount: float
    type: ExpenseType

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "amount": self.amount, "type": self.type}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "CustomExpense":
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            amount=_f(d.get("amount", 0.0)),
            type=str(d.get("type", "monthly")),  # type: ignore[arg-type]
        )


# snake_case attribute -> camelCase key of the stored scenario blob
_PARAM_KEYS: dict[str, str] = {
    "purchase_date": "purchaseDate",
    "property_price": "propertyPrice",
    "property_type": "propertyType",
    "notary_fees": "notaryFees",
    "notary_fees_percent": "notaryFeesPercent",
    "renovation_cost": "renovationCost",
    "property_appreciation": "propertyAppreciation",
    "agency_fees_percent": "agencyFeesPercent",
    "sale_diagnostics": "saleDiagnostics",
    "personal_contribution": "apportPersonnel",
    "property_tax": "propertyTax",
    "condo_fees": "condoFees",
    "maintenance_cost": "maintenanceCost",
    "monthly_extra_costs": "monthlyExtraCosts",
    "yearly_extra_costs": "yearlyExtraCosts",
    "monthly_rent": "monthlyRent",
    "savings_rate": "savingsRate",
    "rent_inflation": "rentInflation",
}


@dataclass(frozen=True)
class SimulationParams:
    """Complete buy-vs-rent configuration.

    Percent fields (``notary_fees_percent``, ``property_appreciation``,
    ``agency_fees_percent``, ``savings_rate``, ``rent_inflation``) are
    percents, e.g. ``3.0`` for 3 %. ``property_tax`` and ``yearly_extra_costs``
    are yearly amounts; ``condo_fees``, ``maintenance_cost``,
    ``monthly_extra_costs`` and ``monthly_rent`` are monthly amounts.
    """

    property_price: float
    notary_fees: float = 0.0
    notary_fees_percent: float = 0.0
    renovation_cost: float = 0.0
    property_appreciation: float = 0.0
    agency_fees_percent: float = 0.0
    sale_diagnostics: float = 0.0
    personal_contribution: float = 0.0
    loans: tuple[Loan, ...] = ()
    property_tax: float = 0.0
    condo_fees: float = 0.0
    maintenance_cost: float = 0.0
    monthly_extra_costs: float = 0.0
    yearly_extra_costs: float = 0.0
    monthly_rent: float = 0.0
    savings_rate: float = 0.0
    rent_inflation: float = 0.0
    purchase_date: str = ""
    property_type: PropertyType = "ancien"

    def __post_init__(self) -> None:
        object.__setattr__(self, "loans", tuple(self.loans))

    def loan(self, loan_id: str) -> Loan | None:
        return next((ln for ln in self.loans if ln.id == loan_id), None)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {key: getattr(self, attr) for attr, key in _PARAM_KEYS.items()}
        out["loans"] = [ln.to_dict() for ln in self.loans]
        return out

    @classmethod
    def from_dict(cls, d: dict[str, Any], base: "SimulationParams | None" = None) -> "SimulationParams":
        """Build params from a camelCase (or snake_case) dict.

        Keys missing from ``d`` are taken from ``base`` when given, otherwise
        from the dataclass defaults.
        """
        kwargs: dict[str, Any] = {}
        for attr, key in _PARAM_KEYS.items():
            if key in d:
                kwargs[attr] = d[key]
            elif attr in d:
                kwargs[attr] = d[attr]
            elif base is not None:
                kwargs[attr] = getattr(base, attr)

        for attr in list(kwargs):
            if attr not in ("purchase_date", "property_type"):
                kwargs[attr] = _f(kwargs[attr])
        if "purchase_date" in kwargs:
            kwargs["purchase_date"] = str(kwargs["purchase_date"] or "")
        if "property_type" in kwargs:
            kwargs["property_type"] = str(kwargs["property_type"] or "ancien")

        if "loans" in d:
            kwargs["loans"] = tuple(Loan.from_dict(x) for x in (d.get("loans") or []))
        elif base is not None:
            kwargs["loans"] = base.loans

        kwargs.setdefault("property_price", 0.0)
        return cls(**kwargs)


# Output column names used by to_frame()/CSV, keyed by SimulationDataPoint attribute.
FRAME_COLUMNS: dict[str, str] = {
    "month": "Month",
    "year": "Year",
    "owner_wealth": "Owner Wealth",
    "tenant_wealth": "Tenant Wealth",
    "monthly_cost_owner": "Monthly Cost Owner",
    "monthly_cost_tenant": "Monthly Cost Tenant",
    "monthly_interests_earned": "Monthly Interests Earned",
    "property_value": "Property Value",
    "net_sale_price": "Net Sale Price",
    "selling_costs": "Selling Costs",
    "debt_remaining": "Debt Remaining",
    "sunk_costs": "Sunk Costs",
}


@dataclass(frozen=True)
class SimulationDataPoint:
    """One monthly snapshot. Money fields are whole currency units."""

    month: int
    year: float
    owner_wealth: int
    tenant_wealth: int
    monthly_cost_owner: int
    monthly_cost_tenant: int
    monthly_interests_earned: int
    property_value: int
    net_sale_price: int
    selling_costs: int
    debt_remaining: int
    sunk_costs: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationResult:
    monthly_data: tuple[SimulationDataPoint, ...] = field(default_factory=tuple)
    yearly_data: tuple[SimulationDataPoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly_data", tuple(self.monthly_data))
        object.__setattr__(self, "yearly_data", tuple(self.yearly_data))

    def to_frame(self, yearly: bool = False) -> pd.DataFrame:
        """Return the monthly (or yearly) series as a DataFrame with Title Case columns."""
        points: Sequence[SimulationDataPoint] = self.yearly_data if yearly else self.monthly_data
        cols = [f.name for f in fields(SimulationDataPoint)]
        df = pd.DataFrame.from_records([p.to_dict() for p in points], columns=cols)
        return df.rename(columns=FRAME_COLUMNS)
