"""Core building blocks: config, message model, prompts, markdown inversion, discovery."""
