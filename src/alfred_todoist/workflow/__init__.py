"""Output collaborators: Script Filter lists and notifications."""
