from utils.logging_setup import get_logger

logger = get_logger(__name__)


class PersistentDataManager:
    _is_loaded = False
    
    @staticmethod
    def store(settings):
        settings.save()

    @staticmethod
    def load(settings):
        # Prevent double loading
        if PersistentDataManager._is_loaded:
            return
        
        if not settings.load():
            logger.info("Starting with an empty device selection")
        
        PersistentDataManager._is_loaded = True
