"""Employee Feedback Analyzer."""
