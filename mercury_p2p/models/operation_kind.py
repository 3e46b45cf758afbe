from enum import Enum


class OperationKind(Enum):
    SEND = "SEND"
    RECEIVE = "RECEIVE"
