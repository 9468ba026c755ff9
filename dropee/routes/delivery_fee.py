# dropee/routes/delivery_fee.py
import logging
from flask import Blueprint, current_app, jsonify, request

from ..logic.fee_engine import calculate_fee
from ..logic.models import FeeOutOfRange
from ..logic.pricing_resolver import resolve_pricing
from ..utils.validation import InvalidFeeRequest, parse_fee_request

logger = logging.getLogger(__name__)

delivery_fee_bp = Blueprint('delivery_fee', __name__)


def _pricing_context():
    return current_app.config["PRICING_STORE"], current_app.config["DEFAULT_PRICING"]


@delivery_fee_bp.route('/calculate-fee', methods=['POST'])
def calculate_delivery_fee():
    """Calcula a estimativa de taxa de um pedido Dropee.

    Recalculada pelo app a cada mudança no formulário; o valor final é
    confirmado pelo admin/agente.
    """
    try:
        data = request.get_json(silent=True)
        logger.info(f"Cálculo de taxa solicitado: {data}")

        fee_request = parse_fee_request(data)

        store, default = _pricing_context()
        pricing = resolve_pricing(store, fee_request.service_id, default)
        result = calculate_fee(fee_request, pricing)

        logger.info(f"Taxa calculada ({pricing.source}): {result.total_fee}")
        return jsonify(result.to_dict()), 200

    except InvalidFeeRequest as e:
        logger.warning(f"Requisição de taxa inválida: {e}")
        return jsonify({"error": str(e)}), 400

    except FeeOutOfRange as e:
        logger.warning(f"Taxa fora do intervalo representável: {e}")
        return jsonify({"error": "Fee out of range"}), 400

    except Exception as e:
        logger.error(f"Erro inesperado ao calcular taxa: {e}", exc_info=True)
        return jsonify({"error": "Failed to calculate fee"}), 500


@delivery_fee_bp.route('/pricing', methods=['GET'])
def get_pricing():
    """Mostra a tabela de preços que seria usada para o serviço informado."""
    service_id = (request.args.get('service_id') or '').strip() or None
    try:
        store, default = _pricing_context()
        pricing = resolve_pricing(store, service_id, default)
        return jsonify({
            "status": "success",
            "source": pricing.source,
            "data": pricing.to_dict()
        }), 200
    except Exception as e:
        logger.error(f"Erro ao resolver tabela de preços: {e}", exc_info=True)
        return jsonify({"error": "Failed to load pricing"}), 500
