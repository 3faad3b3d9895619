# name, price, available
CATALOG = [
    ("Laptop", "1000", True),
    ("Headphones", "50", True),
]

MENU = {
    "1": "Add product to cart",
    "2": "Update quantity",
    "3": "Remove product from cart",
    "4": "Display cart",
    "5": "Display available products",
    "6": "Exit",
}

MSG_ADDED = "Added to cart."
MSG_UPDATED = "Quantity updated."
MSG_REMOVED = "Product removed from cart."
MSG_GOODBYE = "Thank you for shopping!"
MSG_INVALID_CHOICE = "Invalid choice. Please enter a valid option."
