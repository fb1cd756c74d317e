# Prospector core: models, stores, listing views and the generation pipeline.
