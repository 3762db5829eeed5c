"""Factory for creating Tonal Tuner components."""

from typing import Any, Optional, Dict, Type

from ..logger import get_logger
from ..audio.pitch_detector import PitchDetector
from ..services.audio_providers import ToneAudioProvider, WavFileAudioProvider
from ..services.tuning_service import TuningService
from .config import ConfigManager
from .errors import ConfigurationError
from .interfaces import IAudioProvider, IPitchDetector, ITuningService

logger = get_logger(__name__)


class ComponentFactory:
    """Factory for creating Tonal Tuner components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        # Register default component implementations
        self.pitch_detector_classes: Dict[str, Type[IPitchDetector]] = {
            "default": PitchDetector,
        }

        self.audio_provider_classes: Dict[str, Type[IAudioProvider]] = {
            "wav": WavFileAudioProvider,
            "tone": ToneAudioProvider,
        }

        self.tuning_service_classes: Dict[str, Type[ITuningService]] = {
            "default": TuningService,
        }

    def create_pitch_detector(
        self, implementation: str = "default", **kwargs
    ) -> IPitchDetector:
        """Create a pitch detector.

        Args:
            implementation: Name of the implementation to use
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Pitch detector instance

        Raises:
            ValueError: If the implementation is not registered
            ConfigurationError: If the merged settings are invalid
        """
        if implementation not in self.pitch_detector_classes:
            raise ValueError(f"Unknown pitch detector implementation: {implementation}")

        # Get stored configuration
        config = self.config_manager.get_config("pitch_detector")

        # Override with provided parameters
        config.update(kwargs)

        # Create instance
        cls = self.pitch_detector_classes[implementation]
        instance = self._construct(cls, config, "pitch_detector")

        logger.info(f"Created pitch detector: {implementation}")
        return instance

    def create_audio_provider(self, implementation: str, **kwargs) -> IAudioProvider:
        """Create an audio provider.

        The block size defaults to the configured detector block size.

        Args:
            implementation: 'wav' or 'tone'
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Audio provider instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.audio_provider_classes:
            raise ValueError(f"Unknown audio provider implementation: {implementation}")

        kwargs.setdefault(
            "block_size", self.config_manager.get_config("pitch_detector")["block_size"]
        )

        cls = self.audio_provider_classes[implementation]
        instance = self._construct(cls, kwargs, "pitch_detector")

        logger.info(f"Created audio provider: {implementation}")
        return instance

    def create_tuning_service(
        self, implementation: str = "default", **kwargs
    ) -> ITuningService:
        """Create a tuning service.

        A detector matching the audio provider's sample rate and block size is
        created when none is given.

        Args:
            implementation: Name of the implementation to use
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Tuning service instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.tuning_service_classes:
            raise ValueError(f"Unknown tuning service implementation: {implementation}")

        config = self.config_manager.get_config("tuning")
        config.update(kwargs)

        if "detector" not in config:
            detector_params = {}
            provider = config.get("audio_provider")
            if provider is not None:
                detector_params["sample_rate"] = provider.sample_rate
                if hasattr(provider, "block_size"):
                    detector_params["block_size"] = provider.block_size
            config["detector"] = self.create_pitch_detector(**detector_params)

        # Create instance
        cls = self.tuning_service_classes[implementation]
        instance = self._construct(cls, config, "tuning")

        logger.info(f"Created tuning service: {implementation}")
        return instance

    def _construct(self, cls: Type, params: Dict[str, Any], config_name: str) -> Any:
        """Instantiate a component, reporting bad settings as a ConfigurationError.

        Unknown keys and values of the wrong type in a hand-edited config file
        surface as TypeError from the constructor.
        """
        try:
            return cls(**params)
        except TypeError as e:
            config_file = self.config_manager.config_dir / f"{config_name}.json"
            raise ConfigurationError(
                f"Invalid settings for {cls.__name__} (see {config_file}): {e}"
            ) from e
