"""GraphQL documents and REST paths sent to the upstream storefront API.

The documents are sent verbatim. Keeping them compatible with the upstream
schema is the caller's job; the normalizer only relies on the response paths
the facade reads.
"""

CART_REST_PATH = "/api/storefront/cart"

CATEGORY_TREE_ITEM_FRAGMENT = """
  fragment categoryTreeItem on CategoryTreeItem {
    entityId
    name
    path
    description
    productCount
  }
"""

SEO_FRAGMENT = """
  fragment seo on SEO {
    description
    title
  }
"""

IMAGE_FRAGMENT = """
  fragment image on Image {
    url
    urlOriginal
    altText
    isDefault
    width
    height
  }
"""

CART_FRAGMENT = """
  fragment cart on Cart {
    id
    checkoutUrl
    totalQuantity
    cost {
      subtotalAmount {
        amount
        currencyCode
      }
      totalAmount {
        amount
        currencyCode
      }
      totalTaxAmount {
        amount
        currencyCode
      }
    }
    lines(first: 100) {
      edges {
        node {
          id
          quantity
          cost {
            totalAmount {
              amount
              currencyCode
            }
          }
          merchandise {
            ... on ProductVariant {
              id
              title
              selectedOptions {
                name
                value
              }
              product {
                handle
                title
              }
            }
          }
        }
      }
    }
  }
"""

PRODUCT_FRAGMENT = """
  fragment productInfo on Product {
    id
    entityId
    handle
    title
    description
    descriptionHtml
    vendor
    productType
    options {
      id
      name
      values
    }
    prices {
      priceRange {
        min {
          value
          currencyCode
        }
        max {
          value
          currencyCode
        }
      }
    }
    variants(first: 250) {
      edges {
        node {
          id
          title
          availableForSale
          selectedOptions {
            name
            value
          }
          price {
            amount
            currencyCode
          }
          compareAtPrice {
            amount
            currencyCode
          }
        }
      }
    }
    images(first: 20) {
      edges {
        node {
          ...image
        }
      }
    }
    seo {
      ...seo
    }
    tags
    updatedAt
  }
""" + IMAGE_FRAGMENT + SEO_FRAGMENT

COLLECTION_FRAGMENT = """
  fragment collection on Collection {
    handle
    title
    description
    seo {
      ...seo
    }
    updatedAt
  }
""" + SEO_FRAGMENT

PAGE_FRAGMENT = """
  fragment page on Page {
    ... on Page {
      id
      title
      handle
      body
      bodySummary
      seo {
        ...seo
      }
      createdAt
      updatedAt
    }
  }
""" + SEO_FRAGMENT

ADD_TO_CART_MUTATION = """
  mutation addToCart($cartId: ID!, $lines: [CartLineInput!]!) {
    cartLinesAdd(cartId: $cartId, lines: $lines) {
      cart {
        ...cart
      }
    }
  }
""" + CART_FRAGMENT

REMOVE_FROM_CART_MUTATION = """
  mutation removeFromCart($cartId: ID!, $lineIds: [ID!]!) {
    cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {
      cart {
        ...cart
      }
    }
  }
""" + CART_FRAGMENT

EDIT_CART_ITEMS_MUTATION = """
  mutation editCartItems($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
    cartLinesUpdate(cartId: $cartId, lines: $lines) {
      cart {
        ...cart
      }
    }
  }
""" + CART_FRAGMENT

GET_CART_QUERY = """
  query getCart($cartId: ID!) {
    cart(id: $cartId) {
      ...cart
    }
  }
""" + CART_FRAGMENT

GET_COLLECTION_QUERY = """
  query getCollection($handle: String!) {
    collection(handle: $handle) {
      ...collection
    }
  }
""" + COLLECTION_FRAGMENT

GET_COLLECTIONS_QUERY = """
  query getCollections($first: Int = 100) {
    collections(first: $first, sortKey: TITLE) {
      edges {
        node {
          ...collection
        }
      }
    }
  }
""" + COLLECTION_FRAGMENT

GET_COLLECTION_PRODUCTS_QUERY = """
  query getCollectionProducts($first: Int = 100, $categoryId: Int!) {
    site {
      category(entityId: $categoryId) {
        products(first: $first) {
          pageInfo {
            startCursor
            endCursor
          }
          edges {
            cursor
            node {
              ...productInfo
            }
          }
        }
      }
    }
  }
""" + PRODUCT_FRAGMENT

GET_SITE_INFO_QUERY = """
  query getSiteInfo {
    site {
      categoryTree {
        ...categoryTreeItem
      }
    }
  }
""" + CATEGORY_TREE_ITEM_FRAGMENT

GET_PAGE_QUERY = """
  query getPage($handle: String!) {
    pageByHandle(handle: $handle) {
      ...page
    }
  }
""" + PAGE_FRAGMENT

GET_PAGES_QUERY = """
  query getPages {
    pages(first: 100) {
      edges {
        node {
          ...page
        }
      }
    }
  }
""" + PAGE_FRAGMENT

GET_PRODUCT_QUERY = """
  query getProduct($handle: String!) {
    product(handle: $handle) {
      ...productInfo
    }
  }
""" + PRODUCT_FRAGMENT

GET_PRODUCT_RECOMMENDATIONS_QUERY = """
  query getProductRecommendations($productId: ID!) {
    productRecommendations(productId: $productId) {
      ...productInfo
    }
  }
""" + PRODUCT_FRAGMENT

GET_PRODUCTS_QUERY = """
  query getProducts($sortKey: ProductSortKeys, $reverse: Boolean, $query: String) {
    products(sortKey: $sortKey, reverse: $reverse, query: $query, first: 100) {
      edges {
        node {
          ...productInfo
        }
      }
    }
  }
""" + PRODUCT_FRAGMENT
