# Ownership and referential checks for ids coming from clients
import logging
from petshop.errors import InvalidDogReferenceError, InvalidServiceReferenceError

logger = logging.getLogger(__name__)


def distinct_ids(ids):
    """Drop duplicates, keep first-seen order."""
    return list(dict.fromkeys(ids))


def _missing(requested, found):
    found_ids = {entity.id for entity in found}
    return [i for i in requested if i not in found_ids]


def validate_owned_dog_ids(gateway, candidate_ids, owner_id):
    """Every id must resolve to a dog owned by ``owner_id``.

    Ids of dogs that don't exist and ids of somebody else's dogs are reported
    the same way.
    """
    requested = distinct_ids(candidate_ids)
    dogs = gateway.find_dogs(requested, owner_id=owner_id)
    if len(dogs) != len(requested):
        invalid = _missing(requested, dogs)
        logger.warning(f"User {owner_id} referenced invalid or foreign dogs: {invalid}")
        raise InvalidDogReferenceError(invalid)
    return dogs


def validate_existing_service_ids(gateway, candidate_ids):
    requested = distinct_ids(candidate_ids)
    services = gateway.find_services(requested)
    if len(services) != len(requested):
        invalid = _missing(requested, services)
        logger.warning(f"Referenced unknown services: {invalid}")
        raise InvalidServiceReferenceError(invalid)
    return services
