"""Top-level fault triage: classification, reports, presentation and the error funnel."""
