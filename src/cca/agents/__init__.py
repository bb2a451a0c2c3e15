"""The four agents: explorer, writer, searcher, updater."""
