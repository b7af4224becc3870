"""solutionlib.app - save/load orchestration and the ports it depends on."""
