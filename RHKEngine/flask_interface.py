"""
RHK Engine Flask interface.

HTTP entry point for the web front end and scripts:
1. initializes the ReportAgent singleton;
2. exposes the category catalogue and per-category contracts;
3. runs one generation at a time and serves the current report as HTML
   (print view) or JSON.

Every JSON response uses the `{'success': bool, 'error': str, ...}` envelope.
"""

import threading
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Response, jsonify, request
from loguru import logger

from .agent import InputIncomplete, ReportAgent, create_agent
from .core import CategoryNotFound
from .ir import build_response_schema, describe_schema
from .llms import ConfigurationError
from .nodes import AnalyzerFailure
from .utils.config import Settings

# Blueprint
report_bp = Blueprint('rhk_engine', __name__)

# Globals
report_agent: Optional[ReportAgent] = None
generation_in_progress = False
task_lock = threading.Lock()


def initialize_report_engine(agent: Optional[ReportAgent] = None, config: Optional[Settings] = None) -> bool:
    """
    Initialize the RHK Engine.

    Args:
        agent: prebuilt agent; one is created from `config` otherwise.
        config: settings for a new agent; read from the environment when omitted.

    Returns:
        bool: True on success, False when the agent could not be created.
    """
    global report_agent, generation_in_progress
    try:
        report_agent = agent or create_agent(config)
        generation_in_progress = False
        logger.info("RHK Engine initialized")
        return True
    except Exception as e:
        logger.exception(f"RHK Engine initialization failed: {str(e)}")
        return False


def _request_data() -> Dict[str, Any]:
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        logger.warning("request body is not a JSON object, ignored")
        data = {}
    return data


def _error_response(exc: Exception) -> Tuple[Response, int]:
    """Map engine errors to a JSON envelope and status code."""
    if isinstance(exc, CategoryNotFound):
        return jsonify({'success': False, 'error': str(exc), 'kind': 'category'}), 404
    if isinstance(exc, InputIncomplete):
        return jsonify({'success': False, 'error': str(exc), 'kind': 'input', 'field': exc.field}), 400
    if isinstance(exc, ConfigurationError):
        return jsonify({'success': False, 'error': str(exc), 'kind': 'configuration'}), 400
    if isinstance(exc, AnalyzerFailure):
        return jsonify({
            'success': False,
            'error': exc.remediation,
            'kind': exc.kind,
            'detail': str(exc),
        }), 502
    raise exc


def _not_initialized() -> Tuple[Response, int]:
    return jsonify({'success': False, 'error': 'RHK Engine belum diinisialisasi'}), 500


def _document_summary(document) -> Dict[str, Any]:
    return {
        'display_title': document.display_title,
        'pages': document.page_kinds,
        'warnings': [warning.to_dict() for warning in document.warnings],
        'report_url': '/api/report/report',
        'report_json_url': '/api/report/report/json',
    }


@report_bp.route('/status', methods=['GET'])
def get_status():
    """Engine readiness and current report state."""
    with task_lock:
        busy = generation_in_progress
    return jsonify({
        'success': True,
        'initialized': report_agent is not None,
        'busy': busy,
        'api_key_configured': bool(report_agent and report_agent.config.resolve_api_key()),
        'state': report_agent.state.to_dict() if report_agent else None,
    })


@report_bp.route('/categories', methods=['GET'])
def list_categories():
    if not report_agent:
        return _not_initialized()
    categories = [category.to_dict() for category in report_agent.registry.all()]
    return jsonify({'success': True, 'categories': categories, 'count': len(categories)})


@report_bp.route('/categories/<category_id>/schema', methods=['GET'])
def get_category_schema(category_id: str):
    """Analysis contract and response schema for one category."""
    if not report_agent:
        return _not_initialized()
    try:
        category = report_agent.registry.lookup(category_id)
    except CategoryNotFound as e:
        return _error_response(e)
    return jsonify({
        'success': True,
        'contract': describe_schema(category).to_dict(),
        'response_schema': build_response_schema(category),
    })


@report_bp.route('/generate', methods=['POST'])
def generate_report():
    """
    Analyze an image (or roster) and compose a report.

    Request body:
        profile: {name, idNumber, unit, locality}
        categoryId: category id
        image: data URL (narrative categories)
        note: optional hint
        roster: newline-delimited names (roster category)
        className: optional class label
        period: optional reporting period

    Returns:
        Response: JSON summary of the composed report; 409 while another
        generation is running.
    """
    global generation_in_progress

    if not report_agent:
        return _not_initialized()

    with task_lock:
        if generation_in_progress:
            return jsonify({
                'success': False,
                'error': 'Analisis sebelumnya masih berjalan, tunggu hingga selesai.',
                'kind': 'busy',
            }), 409
        generation_in_progress = True

    data = _request_data()
    try:
        document = report_agent.generate_report(
            profile=data.get('profile') or {},
            category_id=data.get('categoryId', ''),
            image=data.get('image'),
            note=data.get('note'),
            roster=data.get('roster'),
            class_name=data.get('className'),
            period=data.get('period'),
        )
    except (CategoryNotFound, InputIncomplete, ConfigurationError, AnalyzerFailure) as e:
        logger.warning(f"generate failed: {type(e).__name__}: {e}")
        return _error_response(e)
    finally:
        with task_lock:
            generation_in_progress = False

    return jsonify({'success': True, 'message': 'Laporan berhasil dibuat', **_document_summary(document)})


@report_bp.route('/compose', methods=['POST'])
def compose_report():
    """Compose from a ready payload (no analyzer call)."""
    if not report_agent:
        return _not_initialized()

    data = _request_data()
    payload = data.get('payload')
    if not isinstance(payload, dict):
        return jsonify({'success': False, 'error': 'payload harus berupa objek JSON', 'kind': 'input'}), 400
    try:
        document = report_agent.compose_from_payload(
            profile=data.get('profile') or {},
            category_id=data.get('categoryId', ''),
            payload=payload,
            image=data.get('image'),
            period=data.get('period'),
        )
    except (CategoryNotFound, InputIncomplete) as e:
        return _error_response(e)

    return jsonify({'success': True, **_document_summary(document)})


@report_bp.route('/report', methods=['GET'])
def get_report_html():
    """Current report as the HTML print view."""
    if not report_agent:
        return _not_initialized()
    if not report_agent.state.has_report:
        return jsonify({'success': False, 'error': 'Belum ada laporan'}), 404
    html_text = report_agent.render_html()
    return Response(html_text, mimetype='text/html')


@report_bp.route('/report/json', methods=['GET'])
def get_report_json():
    if not report_agent:
        return _not_initialized()
    if not report_agent.state.has_report:
        return jsonify({'success': False, 'error': 'Belum ada laporan'}), 404
    return jsonify({'success': True, 'report': report_agent.state.document.to_dict()})


@report_bp.route('/reset', methods=['POST'])
def reset_report():
    if not report_agent:
        return _not_initialized()
    with task_lock:
        if generation_in_progress:
            return jsonify({'success': False, 'error': 'Analisis sedang berjalan', 'kind': 'busy'}), 409
        report_agent.reset()
    return jsonify({'success': True, 'message': 'Laporan dihapus'})


# Error handlers
@report_bp.errorhandler(404)
def not_found(error):
    """Keep 404 responses in the JSON envelope."""
    logger.warning(f"API endpoint not found: {str(error)}")
    return jsonify({
        'success': False,
        'error': 'API endpoint not found'
    }), 404


@report_bp.errorhandler(500)
def internal_error(error):
    """Catch-all for uncaught exceptions."""
    logger.exception(f"internal server error: {str(error)}")
    return jsonify({
        'success': False,
        'error': 'Internal server error'
    }), 500
