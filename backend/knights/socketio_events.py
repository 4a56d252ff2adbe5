from flask_socketio import join_room, leave_room, emit
from flask import current_app, after_this_request, has_request_context
from knights import socketio
from knights.rendering import name_input_id
from knights.services.board import RENAME_STARTED


def board_room(board_code: str) -> str:
    return f"board:{board_code.upper()}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_board(data):
    board_code = (data or {}).get('board_code')
    if not board_code:
        emit('error', {'message': 'board_code is required'})
        return
    room = board_room(board_code)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_board(data):
    board_code = (data or {}).get('board_code')
    if not board_code:
        emit('error', {'message': 'board_code is required'})
        return
    room = board_room(board_code)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def emit_state_update(board_code: str) -> None:
    socketio.emit('state_update', {'board_code': board_code.upper()}, to=board_room(board_code), namespace='/ws')


# ---- Deferred focus after rename ----

def _emit_focus(board_code: str, participant_id: int, delay: float) -> None:
    socketio.sleep(delay)
    socketio.emit(
        'focus_name_input',
        {
            'board_code': board_code.upper(),
            'participant_id': participant_id,
            'input_id': name_input_id(participant_id),
        },
        to=board_room(board_code),
        namespace='/ws',
    )


def schedule_focus(board_code: str, participant_id: int, delay: float = 0.0) -> None:
    """Emit ``focus_name_input`` on a background task.

    Inside a request the task only starts once the view has returned, so the
    re-rendered markup is committed before clients are told to focus.
    """
    def _start():
        socketio.start_background_task(_emit_focus, board_code, participant_id, delay)

    if has_request_context():
        @after_this_request
        def _after(response):
            _start()
            return response
    else:
        _start()


def watch_board(board_code: str, board) -> None:
    """Bridge a board's notifications to its Socket.IO room."""
    delay = float(current_app.config.get('FOCUS_DELAY_SEC', 0))

    def _listener(event, payload):
        if event == RENAME_STARTED:
            schedule_focus(board_code, payload['participant_id'], delay)

    board.subscribe(_listener)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_board', handle_join_board, namespace='/ws')
    socketio.on_event('leave_board', handle_leave_board, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_board', handle_join_board, namespace='/')
        socketio.on_event('leave_board', handle_leave_board, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
