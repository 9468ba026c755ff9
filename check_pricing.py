import sys
from dotenv import load_dotenv

print("--- INICIANDO TESTE DA TABELA DE PREÇOS ---")

print("1. Carregando variáveis do arquivo .env...")
load_dotenv()

from dropee.logic.pricing_resolver import resolve_pricing, system_default_pricing
from dropee.providers.pricing_store import get_pricing_store

service_id = sys.argv[1] if len(sys.argv) > 1 else None

store = get_pricing_store()
print(f"✅ Store configurado: {store.name}")

if not service_id:
    print("\n2. Nenhum service_id informado, mostrando a tabela padrão do sistema.")
    print(f"   {system_default_pricing().to_dict()}")
else:
    print(f"\n2. Buscando linha de preços do serviço {service_id}...")
    try:
        row = store.find_by_service(service_id)
        if row:
            print(f"✅ SUCESSO! Linha encontrada: {row}")
        else:
            print("⚠️  Nenhuma linha para este serviço, o cálculo usará a tabela padrão.")
    except Exception as e:
        print("❌ FALHA! Não foi possível consultar a tabela de preços.")
        print(f"\n   ERRO DETALHADO: {e}")

    pricing = resolve_pricing(store, service_id, system_default_pricing())
    print(f"\n3. Tabela efetiva ({pricing.source}): {pricing.to_dict()}")

print("\n--- TESTE FINALIZADO ---")
