# dropee/logic/pricing_resolver.py
import logging
from typing import Optional

from .. import config
from ..providers.pricing_store import PricingStore
from .models import PricingConfig, to_decimal

logger = logging.getLogger(__name__)


def system_default_pricing() -> PricingConfig:
    """Tabela padrão do sistema. Construída uma vez pela aplicação e passada
    adiante como `default`."""
    return PricingConfig(
        base_price=to_decimal(config.DEFAULT_BASE_PRICE),
        price_per_km=to_decimal(config.DEFAULT_PRICE_PER_KM),
        price_per_kg=to_decimal(config.DEFAULT_PRICE_PER_KG),
        fragile_multiplier=to_decimal(config.DEFAULT_FRAGILE_MULTIPLIER),
        rain_multiplier=to_decimal(config.DEFAULT_RAIN_MULTIPLIER),
        urgent_multiplier=to_decimal(config.DEFAULT_URGENT_MULTIPLIER),
        min_fee=to_decimal(config.DEFAULT_MIN_FEE),
        max_fee=to_decimal(config.DEFAULT_MAX_FEE),
    )


def resolve_pricing(store: Optional[PricingStore], service_id: Optional[str],
                    default: PricingConfig) -> PricingConfig:
    """Retorna a tabela de preços do serviço, ou `default`.

    - sem service_id: `default`, sem consultar o store;
    - linha não encontrada: `default`;
    - erro na consulta (rede, banco fora do ar...): loga e usa `default`.

    Uma linha encontrada mas mal formada NÃO cai no padrão: o erro sobe
    para quem chamou.
    """
    if not service_id or store is None:
        return default

    try:
        row = store.find_by_service(service_id)
    except Exception as e:
        logger.warning(f"Falha ao buscar preços do serviço {service_id} ({store.name}): {e}. Usando padrão.")
        return default

    if not row:
        logger.info(f"Serviço {service_id} sem tabela própria, usando padrão.")
        return default

    return PricingConfig.from_row(row)
