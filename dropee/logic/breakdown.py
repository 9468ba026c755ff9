# dropee/logic/breakdown.py
from decimal import Decimal
from typing import List

from .. import config
from .models import DeliveryFeeRequest, FeeComponents, LineItem, round_money


def format_number(value: float) -> str:
    """Texto do número como o app web mostra (Number#toString do JS):
    5.0 -> "5", 2.5 -> "2.5", 1e16 -> "10000000000000000", 1e-7 -> "1e-7"."""
    _, digits, exponent = Decimal(repr(float(value))).normalize().as_tuple()
    text = "".join(map(str, digits))
    k = len(text)
    n = exponent + k  # posição do ponto decimal
    if k <= n <= 21:
        result = text + "0" * (n - k)
    elif 0 < n <= 21:
        result = text[:n] + "." + text[n:]
    elif -6 < n <= 0:
        result = "0." + "0" * -n + text
    else:
        mantissa = text[0] + ("." + text[1:] if k > 1 else "")
        result = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return "-" + result if value < 0 else result


def _format_distance(distance_km: float) -> str:
    # toFixed(1) só usa ponto fixo abaixo de 1e21
    if abs(distance_km) >= 1e21:
        return format_number(distance_km)
    return f"{distance_km:.1f}"


def build_breakdown(components: FeeComponents, request: DeliveryFeeRequest) -> List[LineItem]:
    """Monta o detalhamento exibido ao cliente antes de confirmar o pedido.

    Taxa base e distância aparecem sempre; os demais itens só quando o valor
    for maior que zero. A ordem é fixa: base, distância, peso, frágil,
    clima, urgência.
    """
    items = [
        LineItem(config.LABEL_BASE, round_money(components.base_fee)),
        LineItem(
            config.LABEL_DISTANCE.format(distance=_format_distance(request.distance_km)),
            round_money(components.distance_fee),
        ),
    ]

    if components.weight_fee > 0:
        items.append(LineItem(
            config.LABEL_WEIGHT.format(weight=format_number(request.weight_kg)),
            round_money(components.weight_fee),
        ))
    if components.fragile_fee > 0:
        items.append(LineItem(config.LABEL_FRAGILE, round_money(components.fragile_fee)))
    if components.weather_fee > 0:
        items.append(LineItem(
            config.LABEL_WEATHER.format(condition=request.weather_condition.value),
            round_money(components.weather_fee),
        ))
    if components.urgency_fee > 0:
        items.append(LineItem(config.LABEL_URGENT, round_money(components.urgency_fee)))

    return items
