from typing import Callable, Dict, Any

class AppActions:
    """
    Callbacks the switcher uses to report outcomes to whatever front end is running.

    switch_succeeded(friendly_name), no_devices_configured(), error(message)
    and selection_changed(new_list) must all be provided.
    """
    REQUIRED_ACTIONS = set([
        "switch_succeeded",
        "no_devices_configured",
        "error",
        "selection_changed",
    ])

    def __init__(self, actions: Dict[str, Callable[..., Any]]):
        missing = self.REQUIRED_ACTIONS - set(actions.keys())
        if missing:
            raise ValueError(f"Missing required actions: {missing}")
        self._actions = actions
    
    def __getattr__(self, name):
        if name in self._actions:
            return self._actions[name]
        raise AttributeError(f"Action '{name}' not found")
