# Saved-prospect listing: filter/sort engine, selection tracking, the board view.
