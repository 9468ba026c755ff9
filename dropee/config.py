# dropee/config.py

"""
Ficheiro central de configurações do cálculo de taxa de entrega Dropee.
Todas as "regras de negócio" que podem mudar com o tempo ficam aqui.
"""
import os

# =================================================
# Tabela de preços padrão do sistema
# =================================================
# Usada quando o serviço não tem linha própria em delivery_pricing
# (ou quando a consulta falha). Os valores devem ficar exatamente assim,
# os apps clientes dependem deles.
DEFAULT_BASE_PRICE = 30
DEFAULT_PRICE_PER_KM = 10
DEFAULT_PRICE_PER_KG = 5
DEFAULT_FRAGILE_MULTIPLIER = 1.5
DEFAULT_RAIN_MULTIPLIER = 1.3
DEFAULT_URGENT_MULTIPLIER = 1.5
DEFAULT_MIN_FEE = 30
DEFAULT_MAX_FEE = 500


# =================================================
# Regras fixas do cálculo
# =================================================
# Os primeiros 2 kg não são cobrados.
FREE_WEIGHT_KG = 2

# Chuva forte cobra 1.5x a taxa de chuva normal.
HEAVY_RAIN_FACTOR = 1.5

# Casas decimais da resposta.
FEE_DECIMAL_PLACES = 2


# =================================================
# Rótulos do detalhamento (breakdown)
# =================================================
LABEL_BASE = "Base Fee"
LABEL_DISTANCE = "Distance ({distance} km)"
LABEL_WEIGHT = "Weight ({weight} kg)"
LABEL_FRAGILE = "Fragile Handling"
LABEL_WEATHER = "Weather ({condition})"
LABEL_URGENT = "Urgent Delivery"


# =================================================
# Infraestrutura (variáveis de ambiente)
# =================================================
PRICING_TABLE = os.environ.get("PRICING_TABLE", "delivery_pricing")

# Supabase (service role) e conexão direta ao Postgres
SUPABASE_URL = os.environ.get("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.environ.get("SUPABASE_SERVICE_KEY")
DATABASE_URL = os.environ.get("DATABASE_URL")

CORS_ALLOWED_ORIGINS = [
    o.strip() for o in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",") if o.strip()
] or ["*"]

# Cabeçalhos aceitos no preflight (os mesmos que o supabase-js envia)
CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
