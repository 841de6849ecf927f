"""异常定义 - 所有错误都来自调用方输入，核心本身没有内部故障"""


class PokerError(ValueError):
    """引擎层所有异常的基类"""


class InvalidCardFormat(PokerError):
    """牌面字符串不是合法的两字符格式（如 'As', 'Td'）"""

    def __init__(self, token=None, desc=None):
        message = "Invalid card token {!r}.".format(token)
        if desc:
            message += " " + desc
        super().__init__(message)
        self.token = token


class InvalidInputSize(PokerError):
    """参与评估的牌数不符合要求"""

    def __init__(self, expected=None, found=None, desc=None):
        message = "Invalid number of cards."
        if expected is not None and found is not None:
            message += " {} expected, found {}.".format(expected, found)
        if desc:
            message += " " + desc
        super().__init__(message)
        self.expected = expected
        self.found = found


class DuplicateCard(PokerError):
    """同一张牌（点数+花色）出现了两次"""

    def __init__(self, card=None):
        message = "Duplicate card"
        if card is not None:
            message += " {}".format(card)
        super().__init__(message + ".")
        self.card = card


class TableError(PokerError):
    """牌桌操作非法：座位数越界、未知座位/牌位、未选满就比牌"""
    pass
