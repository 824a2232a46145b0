# Services package.
#
#   article_service  — list / create / update / title update / delete for Article
#
# Service functions accept the StorageGateway as their first argument so
# that the router layer decides which gateway (production or test) is used
# via the ``get_gateway`` dependency.
