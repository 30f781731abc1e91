"""
Command Line Interface Package

Command Structure:
- slipmatch: Main entry point with utility commands (version, config)
- slipmatch enrich: Match transfer notifications to PocketSmith transactions and enrich them
"""
