from flask import render_template
from markupsafe import Markup, escape

_SVG_OPEN = (
    '<svg width="{size}" height="{size}" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="2" stroke-linecap="round" stroke-linejoin="round" class="{cls}">'
)

ICON_PATHS = {
    'crown': '<path d="m2 4 3 12h14l3-12-6 7-4-7-4 7-6-7zm3 16h14"/>',
    'plus': '<path d="M5 12h14"/><path d="m12 5 0 14"/>',
    'minus': '<path d="M5 12h14"/>',
    'rotateCcw': '<path d="M3 12a9 9 0 1 0 9-9 9.75 9.75 0 0 0-6.74 2.74L3 8"/><path d="M3 3v5h5"/>',
    'trophy': (
        '<path d="M6 9H4.5a2.5 2.5 0 0 1 0-5H6"/><path d="M18 9h1.5a2.5 2.5 0 0 0 0-5H18"/>'
        '<path d="M4 22h16"/><path d="M10 14.66V17c0 .55.47.98.97 1.21C12.04 18.75 13 20.24 13 22"/>'
        '<path d="M14 14.66V17c0 .55-.47.98-.97 1.21C11.96 18.75 11 20.24 11 22"/>'
        '<path d="M18 2H6v7a6 6 0 0 0 12 0V2Z"/>'
    ),
    'users': (
        '<path d="M16 21v-2a4 4 0 0 0-4-4H6a4 4 0 0 0-4 4v2"/><circle cx="9" cy="7" r="4"/>'
        '<path d="m22 21-3.3-3.3a4.8 4.8 0 0 0 0-6.4 4.8 4.8 0 0 0-6.4 0 4.8 4.8 0 0 0 0 6.4A4.8 4.8 0 0 0 22 21z"/>'
    ),
}


def icon(name, size=24, class_name=''):
    """Inline SVG for ``name``; unknown names render as an empty string."""
    paths = ICON_PATHS.get(name)
    if paths is None:
        return Markup('')
    return Markup(_SVG_OPEN.format(size=int(size), cls=escape(class_name)) + paths + '</svg>')


def name_input_id(participant_id):
    return f"name-input-{participant_id}"


def _context(board_code, board):
    return {
        'board_code': board_code,
        'participants': board.participants,
        'ranking': board.compute_ranking(),
        'leader': board.compute_leader(),
        'current_round': board.current_round,
    }


def render_board(board_code, board):
    """Render the board fragment (header, empty state or cards) for ``board``."""
    return render_template('_board.html', **_context(board_code, board))


def render_page(board_code, board):
    return render_template('board.html', **_context(board_code, board))


def init_app(app):
    app.add_template_global(icon, 'icon')
    app.add_template_global(name_input_id, 'name_input_id')
