"""Simple Flask JSON interface for UI metadata."""

import logging
import os

from flask import Flask, current_app, jsonify, request

from ui_metadata.assembly import (
    AssemblyScope,
    LabelsAssembler,
    LanguageAssembler,
    MenuAssembler,
    ProcessAssembler,
    SessionAssembler,
    ToolbarAssembler,
    WindowAssembler,
)
from ui_metadata.config import AssemblyOptions, MetadataContext, configure_logging
from ui_metadata.dictionary import DictionaryRepository, load_snapshot
from ui_metadata.errors import InvalidRequestError, MetadataError

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Configuration
app.config['SNAPSHOT_PATH'] = os.getenv('UI_METADATA_SNAPSHOT')
app.config['DEFAULT_ROLE'] = os.getenv('UI_METADATA_ROLE')
app.config['DICTIONARY'] = None


def get_dictionary() -> DictionaryRepository:
    """The loaded dictionary, read from ``SNAPSHOT_PATH`` on first use."""
    repository = current_app.config['DICTIONARY']
    if repository is None:
        path = current_app.config['SNAPSHOT_PATH']
        if not path:
            raise RuntimeError("UI_METADATA_SNAPSHOT is not set")
        repository = load_snapshot(path)
        current_app.config['DICTIONARY'] = repository
    return repository


def get_scope() -> AssemblyScope:
    """Request scope; role, language and user come from query args or X- headers."""
    options = AssemblyOptions.from_env()
    role_id = request.args.get('role') or request.headers.get('X-Role') or current_app.config['DEFAULT_ROLE']
    if not role_id:
        raise InvalidRequestError("No role given (use ?role= or the X-Role header)")
    context = MetadataContext(
        role_id=role_id,
        role_name=request.args.get('roleName') or request.headers.get('X-Role-Name'),
        language=request.args.get('language') or request.headers.get('X-Language') or options.language,
        user_id=request.args.get('user') or request.headers.get('X-User'),
    )
    return AssemblyScope(repository=get_dictionary(), context=context, options=options)


@app.errorhandler(MetadataError)
def handle_metadata_error(e: MetadataError):
    logger.debug("Request failed: %s", e.message)
    return jsonify({'error': e.message}), e.http_status


@app.route('/meta/window/<window_id>')
def get_window(window_id: str):
    return jsonify(WindowAssembler(get_scope()).build(window_id))


@app.route('/meta/process/<process_id>')
def get_process(process_id: str):
    return jsonify(ProcessAssembler(get_scope()).build_definition(process_id))


@app.route('/meta/report-and-process/<process_id>')
def get_report_and_process(process_id: str):
    return jsonify(ProcessAssembler(get_scope()).build_legacy(process_id))


@app.route('/meta/menu')
def get_menu():
    return jsonify(MenuAssembler(get_scope()).build())


@app.route('/meta/session')
def get_session():
    return jsonify(SessionAssembler(get_scope()).build())


@app.route('/meta/toolbar/<window_id>')
def get_toolbar(window_id: str):
    """Toolbar of a window; ``?tabId=`` narrows process buttons, ``?isNew=true`` disables DELETE."""
    is_new = request.args.get('isNew', 'false').lower() in ('1', 'true', 'yes')
    toolbar = ToolbarAssembler(get_scope()).build(window_id, tab_id=request.args.get('tabId'), is_new=is_new)
    return jsonify(toolbar)


@app.route('/meta/labels')
def get_labels():
    return jsonify(LabelsAssembler(get_scope()).build())


@app.route('/meta/language')
def get_languages():
    return jsonify(LanguageAssembler(get_scope()).build())


if __name__ == '__main__':
    configure_logging()
    app.run(debug=True, port=5002)
