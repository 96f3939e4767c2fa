# Database module
from outfit_service.db.mongo import (
    connect,
    close,
    get_collection,
    set_database,
    ensure_indexes,
    health_check,
)
from outfit_service.db.wardrobe import (
    get_clothing_items,
    get_clothing_item,
    get_items_by_ids,
    get_wardrobe_count,
)
from outfit_service.db.outfits import (
    insert_outfit,
    get_outfit,
    get_user_outfits,
    get_outfit_count,
)
from outfit_service.db.feedback import (
    insert_feedback,
    get_feedback,
)
