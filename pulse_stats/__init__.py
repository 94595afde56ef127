"""
pulse-stats - GitHub activity statistics for a single project.

Combines GitHub's pulse endpoints, the public REST API and the project's
main page into one flat record, served as JSON or as an HTML report.
"""
