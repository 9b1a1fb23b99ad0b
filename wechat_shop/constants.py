CB_OPEN_SHOP = "OPEN_SHOP"
CB_OPEN_HELP = "OPEN_HELP"
CB_VIEW_CART = "VIEW_CART"
CB_CLEAR_CART = "CLEAR_CART"
CB_CHECKOUT = "CHECKOUT"

# ADD_<option_id>
CB_ADD_PREFIX = "ADD_"
