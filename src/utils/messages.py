from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class SellerLogoutMessage(Message):
    """
    broadcasted when the seller logs out
    """

    bubble = True


class SellerRejectedMessage(Message):
    """
    Posted at App level when a screen finds the session missing or not verified.
    The app drops the session and sends the operator back to the login screen.
    """

    bubble = True

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason
