"""tally - a simple personal expense tracker."""
