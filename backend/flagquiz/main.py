from flask import Blueprint, jsonify
from flagquiz.services.quiz import sessions

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Guess the Flag server!', 'active_sessions': len(sessions)})
