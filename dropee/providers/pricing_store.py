# dropee/providers/pricing_store.py
import os
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import psycopg2
import psycopg2.extras

from .. import config

logger = logging.getLogger(__name__)


def _as_datetime(value) -> datetime:
    """updated_at vem como datetime (psycopg2) ou texto ISO (Supabase).
    Sem fuso conta como UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _most_recent(rows: Iterable[dict]) -> Optional[dict]:
    """Desempate quando o mesmo service_id tem várias linhas:
    vence o updated_at mais recente; linhas sem updated_at ficam por último."""
    rows = list(rows)
    if not rows:
        return None
    dated = [r for r in rows if r.get("updated_at")]
    if not dated:
        return rows[0]
    return max(dated, key=lambda r: _as_datetime(r["updated_at"]))


class PricingStore(ABC):
    name = "abstract"

    @abstractmethod
    def find_by_service(self, service_id: str) -> Optional[dict]:
        """Retorna a linha de delivery_pricing do serviço, ou None."""
        raise NotImplementedError()


class SupabasePricingStore(PricingStore):
    name = "supabase"

    def __init__(self, client, table: str = config.PRICING_TABLE):
        self.client = client
        self.table = table

    def find_by_service(self, service_id: str) -> Optional[dict]:
        if not self.client:
            raise RuntimeError("Supabase client não inicializado.")

        response = (
            self.client.table(self.table)
            .select("*")
            .eq("service_id", service_id)
            .order("updated_at", desc=True, nullsfirst=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]


class PostgresPricingStore(PricingStore):
    name = "postgres"

    def __init__(self, conn_factory: Callable, table: str = config.PRICING_TABLE):
        self.conn_factory = conn_factory
        self.table = table

    def find_by_service(self, service_id: str) -> Optional[dict]:
        conn = self.conn_factory()
        if not conn:
            raise RuntimeError("Falha ao conectar no banco de dados.")
        try:
            with conn.cursor(cursor_factory=psycopg2.extras.DictCursor) as cur:
                cur.execute(
                    f"""
                    SELECT *
                    FROM {self.table}
                    WHERE service_id = %s
                    ORDER BY updated_at DESC NULLS LAST
                    LIMIT 1
                    """,
                    (service_id,),
                )
                row = cur.fetchone()
                return dict(row) if row else None
        finally:
            conn.close()


class InMemoryPricingStore(PricingStore):
    """Store local (testes e desenvolvimento sem banco)."""
    name = "memory"

    def __init__(self, rows: Optional[Iterable[dict]] = None):
        self.rows = list(rows or [])

    def add(self, row: dict) -> None:
        self.rows.append(dict(row))

    def find_by_service(self, service_id: str) -> Optional[dict]:
        matches = [r for r in self.rows if r.get("service_id") == service_id]
        return _most_recent(matches)


def get_pricing_store(mode: Optional[str] = None) -> PricingStore:
    mode = (mode or os.environ.get("PRICING_STORE", "supabase")).lower()

    if mode == "postgres":
        from ..utils.helpers import get_db_connection
        logger.info("Usando PostgreSQL (DATABASE_URL) para a tabela de preços.")
        return PostgresPricingStore(get_db_connection)

    if mode == "memory":
        logger.info("Usando store em MEMÓRIA para a tabela de preços.")
        return InMemoryPricingStore()

    if mode != "supabase":
        logger.warning(f"PRICING_STORE desconhecido '{mode}', usando supabase.")

    from ..utils.helpers import get_supabase_client
    logger.info("Usando Supabase para a tabela de preços.")
    return SupabasePricingStore(get_supabase_client())
