"""BTCChina JSON-RPC request signing."""
