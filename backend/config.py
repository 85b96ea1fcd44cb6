import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # In-memory by default: finished-game results live as long as the process
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Rounds per game
    TOTAL_ROUNDS = int(os.environ.get('TOTAL_ROUNDS', '8'))
    # Delay between an accepted answer and the result event (ms)
    REVEAL_DELAY_MS = int(os.environ.get('REVEAL_DELAY_MS', '600'))
    # Run the reveal timer under TESTING as well (synchronously)
    ENABLE_SCHEDULER_IN_TESTS = os.environ.get('ENABLE_SCHEDULER_IN_TESTS', '') == '1'
    # Default page size for /api/quiz/results
    RESULTS_PAGE_SIZE = int(os.environ.get('RESULTS_PAGE_SIZE', '20'))
