from flask import Blueprint, jsonify, request, current_app, abort, make_response
from knights import boards
from knights.rendering import render_board
from knights.socketio_events import emit_state_update, watch_board


boards_api = Blueprint('boards_api', __name__)


def create_board():
    """Create a board for a new page session and bridge its notifications."""
    code, board = boards.create()
    watch_board(code, board)
    try:
        current_app.logger.info(f"[create] board={code} live={len(boards)}")
    except Exception:
        pass
    return code, board


def _board_or_404(board_code):
    board = boards.get(board_code)
    if board is None:
        abort(make_response(jsonify({'error': 'Board not found'}), 404))
    return board


def _payload(board_code, board, **extra):
    payload = board.to_dict()
    payload['board_code'] = board_code.upper()
    payload['html'] = render_board(board_code.upper(), board)
    payload.update(extra)
    return payload


def _mutated(board_code, board, status=200, changed=True, **extra):
    # Unknown participant ids are no-ops; clients have nothing to re-fetch
    if changed:
        emit_state_update(board_code)
    return jsonify(_payload(board_code, board, **extra)), status


def _confirmed(data):
    """Confirmation predicate built from the client's answer to the prompt."""
    answer = bool((data or {}).get('confirm'))
    return lambda prompt: answer


@boards_api.route('/create', methods=['POST'])
def create():
    code, board = create_board()
    return jsonify({'message': 'New board created!', 'board_code': code}), 201


@boards_api.route('/<string:board_code>', methods=['DELETE'])
def discard(board_code):
    if not boards.discard(board_code):
        return jsonify({'error': 'Board not found'}), 404
    current_app.logger.info(f"[discard] board={board_code.upper()} live={len(boards)}")
    return jsonify({'ok': True})


@boards_api.route('/<string:board_code>/state', methods=['GET'])
def get_state(board_code):
    board = _board_or_404(board_code)
    payload = board.to_dict()
    payload['board_code'] = board_code.upper()
    return jsonify(payload)


@boards_api.route('/<string:board_code>/render', methods=['GET'])
def get_render(board_code):
    board = _board_or_404(board_code)
    return render_board(board_code.upper(), board)


@boards_api.route('/<string:board_code>/participants', methods=['POST'])
def add_participant(board_code):
    board = _board_or_404(board_code)
    participant = board.add_participant()
    current_app.logger.info(f"[add] board={board_code.upper()} participant={participant.id}")
    return _mutated(board_code, board, 201, participant=participant.to_dict())


@boards_api.route('/<string:board_code>/participants/<int:participant_id>', methods=['DELETE'])
def remove_participant(board_code, participant_id):
    board = _board_or_404(board_code)
    removed = board.remove_participant(participant_id)
    current_app.logger.info(f"[remove] board={board_code.upper()} participant={participant_id} removed={removed}")
    return _mutated(board_code, board, changed=removed, removed=removed)


@boards_api.route('/<string:board_code>/participants/<int:participant_id>/score', methods=['POST'])
def adjust_score(board_code, participant_id):
    board = _board_or_404(board_code)
    data = request.get_json(silent=True) or {}
    delta = data.get('delta')
    # bool is an int subclass; reject it along with floats and strings
    if isinstance(delta, bool) or not isinstance(delta, int):
        return jsonify({'error': 'delta must be an integer'}), 400
    participant = board.adjust_score(participant_id, delta)
    return _mutated(board_code, board, changed=participant is not None)


@boards_api.route('/<string:board_code>/participants/<int:participant_id>/rename/begin', methods=['POST'])
def begin_rename(board_code, participant_id):
    board = _board_or_404(board_code)
    participant = board.begin_rename(participant_id)
    return _mutated(board_code, board, changed=participant is not None)


@boards_api.route('/<string:board_code>/participants/<int:participant_id>/rename/commit', methods=['POST'])
def commit_rename(board_code, participant_id):
    board = _board_or_404(board_code)
    data = request.get_json(silent=True) or {}
    name = data.get('name')
    if name is not None and not isinstance(name, str):
        return jsonify({'error': 'name must be a string'}), 400
    participant = board.commit_rename(participant_id, name)
    if participant:
        current_app.logger.info(f"[rename] board={board_code.upper()} participant={participant_id} name={participant.name!r}")
    return _mutated(board_code, board, changed=participant is not None)


@boards_api.route('/<string:board_code>/participants/<int:participant_id>/rename/cancel', methods=['POST'])
def cancel_rename(board_code, participant_id):
    board = _board_or_404(board_code)
    participant = board.cancel_rename(participant_id)
    return _mutated(board_code, board, changed=participant is not None)


@boards_api.route('/<string:board_code>/reset', methods=['POST'])
def reset_scores(board_code):
    board = _board_or_404(board_code)
    applied = board.reset_scores(confirm=_confirmed(request.get_json(silent=True)))
    current_app.logger.info(f"[reset] board={board_code.upper()} applied={applied}")
    if not applied:
        return jsonify(_payload(board_code, board, applied=False))
    return _mutated(board_code, board, applied=True)


@boards_api.route('/<string:board_code>/new-game', methods=['POST'])
def new_game(board_code):
    board = _board_or_404(board_code)
    applied = board.new_game(confirm=_confirmed(request.get_json(silent=True)))
    current_app.logger.info(f"[new_game] board={board_code.upper()} applied={applied}")
    if not applied:
        return jsonify(_payload(board_code, board, applied=False))
    return _mutated(board_code, board, applied=True)
