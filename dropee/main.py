import os
import logging
from datetime import datetime
from flask import Flask, jsonify, request, make_response
from flask_cors import CORS
from dotenv import load_dotenv

# --- Configuração de Logging e .env ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

load_dotenv()

from . import config
from .logic.pricing_resolver import system_default_pricing
from .providers.pricing_store import get_pricing_store
from .routes.delivery_fee import delivery_fee_bp


def create_app(pricing_store=None, default_pricing=None):
    app = Flask(__name__)
    app.url_map.strict_slashes = False

    # Tabela padrão construída uma vez e passada para o resolver
    app.config["DEFAULT_PRICING"] = default_pricing or system_default_pricing()
    app.config["PRICING_STORE"] = pricing_store if pricing_store is not None else get_pricing_store()

    # ---------------- CORS ----------------
    CORS(
        app,
        resources={r"/api/*": {"origins": config.CORS_ALLOWED_ORIGINS}},
        allow_headers=[h.strip() for h in config.CORS_ALLOW_HEADERS.split(",")],
        methods=["GET", "POST", "OPTIONS"]
    )

    @app.before_request
    def handle_preflight():
        # Preflight responde igual para qualquer rota/payload
        if request.method == "OPTIONS":
            resp = make_response("", 200)
            resp.headers["Access-Control-Allow-Origin"] = "*"
            resp.headers["Access-Control-Allow-Headers"] = config.CORS_ALLOW_HEADERS
            resp.headers["Access-Control-Allow-Methods"] = config.CORS_ALLOW_METHODS
            return resp

    # --- REGISTRO DE BLUEPRINTS ---
    app.register_blueprint(delivery_fee_bp, url_prefix='/api/delivery')

    # --- Rotas de Status ---
    @app.route('/')
    def index():
        return jsonify({"status": "online", "message": "Servidor Dropee funcionando!"})

    @app.route('/health')
    def health_check_simple():
        return jsonify({
            "status": "ok",
            "message": "Server is running",
            "timestamp": datetime.now().isoformat(),
            "service": "Dropee Delivery Fee API"
        }), 200

    @app.route('/api/health')
    def health_check():
        return jsonify({
            "status": "healthy",
            "pricing_store": app.config["PRICING_STORE"].name,
            "cors_enabled": True
        })

    # --- Handlers de Erro ---
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint não encontrado", "path": request.path}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Método não permitido", "method": request.method}), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Erro interno: {error}", exc_info=True)
        return jsonify({"error": "Erro interno do servidor"}), 500

    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    logger.info(f"Iniciando servidor na porta {port} (debug: {debug})")
    create_app().run(host='0.0.0.0', port=port, debug=debug, use_reloader=debug)
