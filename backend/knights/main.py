from flask import Blueprint, jsonify
from knights import boards
from knights.api.boards import create_board
from knights.rendering import render_page

main = Blueprint('main', __name__)

@main.route('/')
def index():
    # Every page load is a new session with a fresh board
    code, board = create_board()
    return render_page(code, board)

@main.route('/boards/<string:board_code>')
def show_board(board_code):
    board = boards.get(board_code)
    if board is None:
        return jsonify({'error': 'Board not found'}), 404
    return render_page(board_code.upper(), board)

@main.route('/health')
def health():
    return jsonify({'ok': True, 'boards': len(boards)})
