from .endpoint import Endpoint as Endpoint
