"""
PREPDESK - Pipeline Records, Extraction, and Preparation Desk

A job-application tracking core that turns chat-style intake into clean
application records and lays out interview-preparation sprints.

Architecture:
- Intake Context: Natural-language application intake and chat tool payload normalization
- Prep Context: Interview prep sprint generation and progress tracking
"""

__version__ = "0.1.0"
