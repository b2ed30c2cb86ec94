"""
Response envelope helpers

Every body is shaped as {success, message?, data?, count?}.
"""

from flask import current_app, jsonify


def success_response(data=None, message=None, status=200, count=None):
    body = {'success': True}
    if message is not None:
        body['message'] = message
    if count is not None:
        body['count'] = count
    if data is not None:
        body['data'] = data
    return jsonify(body), status


def error_response(message, status=400, error=None):
    """Build a failure envelope; `error` detail is only exposed in development"""
    body = {'success': False, 'message': message}
    if error is not None and current_app.config.get('SHOW_ERROR_DETAILS'):
        body['error'] = str(error)
    return jsonify(body), status


def list_response(items):
    return success_response(data=items, count=len(items))
