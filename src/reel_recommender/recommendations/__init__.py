"""LLM-driven recommendation pipeline: prompt, generation, orchestration."""
