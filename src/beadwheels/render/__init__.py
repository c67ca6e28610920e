"""Drawing backend and composition painter."""
