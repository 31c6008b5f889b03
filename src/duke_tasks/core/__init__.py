"""
Core of the interpreter.

Components:
- ports.py: Ui / Storage protocols
- commands.py: the Command family executed against a TaskList
- state.py: AppState wiring shared by the console loop
"""
