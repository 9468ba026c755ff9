# dropee/logic/models.py
from dataclasses import dataclass, field
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Optional, Tuple

from .. import config

PRICING_FIELDS = (
    "base_price",
    "price_per_km",
    "price_per_kg",
    "fragile_multiplier",
    "rain_multiplier",
    "urgent_multiplier",
    "min_fee",
    "max_fee",
)

FEE_FIELDS = (
    "base_fee",
    "distance_fee",
    "weight_fee",
    "fragile_fee",
    "weather_fee",
    "urgency_fee",
)

_CENT = Decimal(1).scaleb(-config.FEE_DECIMAL_PLACES)


def to_decimal(value) -> Decimal:
    """Converte int/float/str/Decimal para Decimal pela representação em texto
    (evita herdar o ruído binário do float)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Valor numérico inválido: {value!r}")
    return Decimal(str(value))


class FeeOutOfRange(ArithmeticError):
    """Componente grande demais para caber num número JSON."""


def round_money(value: Decimal) -> float:
    # meio para longe do zero, 2 casas
    with localcontext() as ctx:
        # precisão suficiente para todos os dígitos inteiros + centavos
        ctx.prec = max(ctx.prec, value.adjusted() + config.FEE_DECIMAL_PLACES + 2)
        rounded = float(value.quantize(_CENT, rounding=ROUND_HALF_UP))
    if not math.isfinite(rounded):
        raise FeeOutOfRange(f"Valor fora do intervalo: {value}")
    return rounded


class WeatherCondition(str, Enum):
    CLEAR = "clear"
    RAIN = "rain"
    HEAVY_RAIN = "heavy_rain"


class Urgency(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    SCHEDULED = "scheduled"


@dataclass(frozen=True)
class DeliveryFeeRequest:
    distance_km: float
    weight_kg: float
    is_fragile: bool = False
    weather_condition: WeatherCondition = WeatherCondition.CLEAR
    urgency: Urgency = Urgency.NORMAL
    service_id: Optional[str] = None


@dataclass(frozen=True)
class PricingConfig:
    """Linha de delivery_pricing já convertida.

    `service_id` só vem preenchido quando a configuração saiu da tabela;
    a configuração padrão do sistema tem `service_id=None`.
    """
    base_price: Decimal
    price_per_km: Decimal
    price_per_kg: Decimal
    fragile_multiplier: Decimal
    rain_multiplier: Decimal
    urgent_multiplier: Decimal
    min_fee: Decimal
    max_fee: Decimal
    service_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "PricingConfig":
        """Levanta KeyError/TypeError/ArithmeticError se a linha estiver mal formada."""
        values = {name: to_decimal(row[name]) for name in PRICING_FIELDS}
        for name, value in values.items():
            if not value.is_finite():
                raise ValueError(f"Valor não finito em {name}: {value}")
        service_id = row.get("service_id")
        return cls(service_id=str(service_id) if service_id else None, **values)

    @property
    def source(self) -> str:
        return "service" if self.service_id else "default"

    def to_dict(self) -> dict:
        data = {name: float(getattr(self, name)) for name in PRICING_FIELDS}
        data["service_id"] = self.service_id
        return data


@dataclass(frozen=True)
class FeeComponents:
    """Valores brutos (sem arredondamento) calculados pelo motor."""
    base_fee: Decimal
    distance_fee: Decimal
    weight_fee: Decimal
    fragile_fee: Decimal
    weather_fee: Decimal
    urgency_fee: Decimal

    @property
    def raw_total(self) -> Decimal:
        return sum((getattr(self, name) for name in FEE_FIELDS), Decimal(0))


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: float

    def to_dict(self) -> dict:
        return {"label": self.label, "amount": self.amount}


@dataclass(frozen=True)
class FeeBreakdown:
    base_fee: float
    distance_fee: float
    weight_fee: float
    fragile_fee: float
    weather_fee: float
    urgency_fee: float
    total_fee: float
    breakdown: Tuple[LineItem, ...] = field(default_factory=tuple)

    def order_columns(self) -> dict:
        """Colunas de taxa gravadas junto do pedido em delivery_orders."""
        columns = {name: getattr(self, name) for name in FEE_FIELDS}
        columns["total_fee"] = self.total_fee
        return columns

    def to_dict(self) -> dict:
        data = self.order_columns()
        data["breakdown"] = [item.to_dict() for item in self.breakdown]
        return data
