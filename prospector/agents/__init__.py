# Generation pipeline: prompts, response extraction, record validation, bulk runs.
