from .modes import ModeResponse, ModeListResponse, SwitchResponse, ErrorResponse
