"""Administrative sales reporting service over the order-management store."""
