"""Click layer: the root command's context and the REPL driver."""
