class DslGenException(Exception):
    pass


class DslGenConfigError(DslGenException):
    pass


class DslGenInternalException(DslGenException):
    pass


class GenerationError(DslGenException):
    """
    Base for errors aborting a generation run

    :param path: path of the node whose build failed, e.g. TestPlan[Plan]/ThreadGroup[Users]
    """

    def __init__(self, message, path=None):
        if path:
            message = "%s (at %s)" % (message, path)
        super(GenerationError, self).__init__(message)
        self.path = path


class MalformedPropertyError(GenerationError):
    def __init__(self, property_name, raw_value, param_type, path=None, reason=None):
        """
        :type property_name: str
        :type param_type: str
        """
        msg = "Property '%s' value %r can't be used as %s" % (property_name, raw_value, param_type)
        if reason:
            msg += ": %s" % reason
        super(MalformedPropertyError, self).__init__(msg, path)
        self.property_name = property_name
        self.raw_value = raw_value
        self.param_type = param_type


class UnsupportedExpressionError(GenerationError):
    def __init__(self, element_type, property_name, raw_text, path=None):
        msg = "Using JMeter expressions in %s property '%s' is still not supported: %s. " \
              "Request it as an issue in the project repository and we will add support for it."
        super(UnsupportedExpressionError, self).__init__(msg % (element_type, property_name, raw_text), path)
        self.element_type = element_type
        self.property_name = property_name
        self.raw_text = raw_text


class NoBuilderFoundError(GenerationError):
    def __init__(self, element_type, path=None, reason=None):
        msg = "No DSL builder found for element %s" % element_type
        if reason:
            msg += " (%s)" % reason
        super(NoBuilderFoundError, self).__init__(msg, path)
        self.element_type = element_type
