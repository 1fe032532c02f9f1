"""
Bundled sample catalog.

Seeds the local backup the first time it is read and nothing has been
persisted yet. Records carry no id; LocalBackupStore numbers them from 1.
"""

SAMPLE_PRODUCTS = [
    {
        "name": "Aviator Classic",
        "price": 129.99,
        "original_price": 159.99,
        "discount": 18.75,
        "category": "Sunglasses",
        "brand": "Ray-Ban",
        "material": "Metal",
        "shape": "Aviator",
        "color": "Gold",
        "size": "Medium",
        "sizes": ["Small", "Medium", "Large"],
        "framecolor": "Gold",
        "style": "Classic",
        "rim": "Full Rim",
        "gender": "Unisex",
        "type": "Sunglasses",
        "lenstypes": ["Polarized", "Gradient"],
        "image": "/images/products/aviator-classic.jpg",
        "gallery": ["/images/products/aviator-classic.jpg", "/images/products/aviator-classic-side.jpg"],
        "colorimages": {"Gold": "/images/products/aviator-classic.jpg"},
        "description": "Timeless teardrop aviators with a lightweight metal frame.",
        "features": ["100% UV protection", "Adjustable nose pads"],
        "specifications": "Lens width: 58mm; Bridge: 14mm; Temple: 135mm",
        "status": "active",
        "featured": True,
        "bestseller": True,
    },
    {
        "name": "Wayfarer Bold",
        "price": 99.0,
        "original_price": 99.0,
        "discount": 0.0,
        "category": "Sunglasses",
        "brand": "Ray-Ban",
        "material": "Acetate",
        "shape": "Square",
        "color": "Black",
        "size": "Large",
        "sizes": ["Medium", "Large"],
        "framecolor": "Black",
        "style": "Retro",
        "rim": "Full Rim",
        "gender": "Unisex",
        "type": "Sunglasses",
        "lenstypes": ["Standard"],
        "image": "/images/products/wayfarer-bold.jpg",
        "gallery": ["/images/products/wayfarer-bold.jpg"],
        "colorimages": {"Black": "/images/products/wayfarer-bold.jpg"},
        "description": "Thick acetate frame with an iconic trapezoid silhouette.",
        "features": ["Scratch-resistant lenses"],
        "specifications": "Lens width: 54mm; Bridge: 18mm; Temple: 145mm",
        "status": "active",
        "featured": False,
        "bestseller": True,
    },
    {
        "name": "Round Reader",
        "price": 59.5,
        "original_price": 69.5,
        "discount": 14.39,
        "category": "Eyeglasses",
        "brand": "Oliver Peoples",
        "material": "Titanium",
        "shape": "Round",
        "color": "Silver",
        "size": "Small",
        "sizes": ["Small"],
        "framecolor": "Silver",
        "style": "Vintage",
        "rim": "Full Rim",
        "gender": "Women",
        "type": "Eyeglasses",
        "lenstypes": ["Single Vision", "Blue Light"],
        "image": "/images/products/round-reader.jpg",
        "gallery": ["/images/products/round-reader.jpg"],
        "colorimages": {"Silver": "/images/products/round-reader.jpg"},
        "description": "Featherweight titanium rounds for all-day reading.",
        "features": ["Hypoallergenic", "Spring hinges"],
        "specifications": "Lens width: 47mm; Bridge: 21mm; Temple: 140mm",
        "status": "active",
        "featured": True,
        "bestseller": False,
    },
    {
        "name": "Sport Wrap",
        "price": 149.0,
        "original_price": 179.0,
        "discount": 16.76,
        "category": "Sports Eyewear",
        "brand": "Oakley",
        "material": "O Matter",
        "shape": "Wrap",
        "color": "Matte Black",
        "size": "Large",
        "sizes": ["Large"],
        "framecolor": "Matte Black",
        "style": "Sport",
        "rim": "Half Rim",
        "gender": "Men",
        "type": "Sunglasses",
        "lenstypes": ["Polarized", "Mirrored"],
        "image": "/images/products/sport-wrap.jpg",
        "gallery": ["/images/products/sport-wrap.jpg"],
        "colorimages": {"Matte Black": "/images/products/sport-wrap.jpg"},
        "description": "Wraparound shield for high-speed sports.",
        "features": ["Impact resistant", "Rubber grip temples"],
        "specifications": "Lens width: 62mm; Bridge: 12mm; Temple: 128mm",
        "status": "active",
        "featured": False,
        "bestseller": False,
    },
]
