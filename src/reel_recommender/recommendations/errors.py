class RecommendationPipelineError(RuntimeError):
    """A request-fatal failure in the recommendation pipeline."""

    message = "Error fetching recommendations"

    def __init__(self, details: str = ""):
        super().__init__(details or self.message)
        self.details = details


class LocationUnavailableError(RecommendationPipelineError):
    message = "Error fetching location data"


class WeatherUnavailableError(RecommendationPipelineError):
    message = "Error fetching weather data"


class RecommendationGenerationError(RecommendationPipelineError):
    """The LLM call failed or returned something unusable."""
    message = "Error fetching recommendations"
