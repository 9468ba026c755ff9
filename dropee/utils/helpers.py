# dropee/utils/helpers.py
"""Clientes de infraestrutura usados pelos stores de preço."""
import logging
from typing import Optional

import psycopg2
from psycopg2.extras import register_uuid
from supabase import create_client, Client

from .. import config

logger = logging.getLogger(__name__)

_supabase: Optional[Client] = None


def get_supabase_client() -> Optional[Client]:
    """Cria o client na primeira chamada e reaproveita nas seguintes.

    Sem credenciais (ou se a criação falhar) retorna None; o store de preços
    trata isso como consulta indisponível e o cálculo usa a tabela padrão.
    """
    global _supabase
    if _supabase is not None:
        return _supabase

    if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_KEY:
        logger.error("❌ SUPABASE_URL e SUPABASE_SERVICE_KEY são obrigatórias para ler delivery_pricing.")
        return None
    try:
        _supabase = create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY)
        logger.info("✅ Supabase client inicializado.")
    except Exception as e:
        logger.error(f"❌ Falha ao inicializar Supabase: {e}")
        _supabase = None
    return _supabase


def get_db_connection():
    """Conexão nova por consulta; quem chama fecha. None se indisponível."""
    if not config.DATABASE_URL:
        logger.error("❌ DATABASE_URL não encontrada.")
        return None
    try:
        conn = psycopg2.connect(config.DATABASE_URL)
        register_uuid(None, conn)
        return conn
    except psycopg2.Error as e:
        logger.error(f"❌ Conexão com o banco de preços falhou: {e}", exc_info=True)
        return None
